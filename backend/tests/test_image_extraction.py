import pytest

from exceptions import InputValidationException, ProviderException
from services.image_extraction import is_no_text, to_inline_part, validate_images


class TestToInlinePart:

    def test_data_uri(self):
        part = to_inline_part("data:image/jpeg;base64,/9j/4AAQ")
        assert part == {"inline_data": {"mime_type": "image/jpeg", "data": "/9j/4AAQ"}}

    def test_raw_base64_defaults_to_png(self):
        part = to_inline_part("iVBORw0KGgo=")
        assert part == {"inline_data": {"mime_type": "image/png", "data": "iVBORw0KGgo="}}


class TestValidateImages:

    @pytest.mark.parametrize("images,reason", [
        ([], "No images provided"),
        (None, "No images provided"),
        (["a"] * 6, "Maximum 5 images per request"),
        (["a", ""], "Invalid image format"),
        (["a", 3], "Invalid image format"),
    ])
    def test_rejected(self, images, reason):
        with pytest.raises(InputValidationException) as exc_info:
            validate_images(images)
        assert exc_info.value.message == reason
        assert exc_info.value.status_code == 400

    def test_accepted(self):
        assert validate_images(["a", "b"]) == ["a", "b"]


class TestIsNoText:

    @pytest.mark.parametrize("text", ["", "  ", "No text detected in image.", '"no text detected in image"'])
    def test_no_text(self, text):
        assert is_no_text(text)

    def test_real_text(self):
        assert not is_no_text("BREAKING: taxes doubled")


@pytest.mark.asyncio
class TestImageTextExtractor:
    """Tests for ImageTextExtractor.run."""

    async def test_ocr_only(self, settings, fake_client, gemini_reply):
        from services.image_extraction import ImageTextExtractor

        fake_client.generate.return_value = gemini_reply("BREAKING: taxes doubled in 2023")
        response = await ImageTextExtractor(fake_client, settings).run(
            ["data:image/png;base64,AAAA", "BBBB"]
        )

        assert response.success is True
        assert response.extracted_text == "BREAKING: taxes doubled in 2023"
        assert response.claims is None
        assert response.image_count == 2

        args, kwargs = fake_client.generate.call_args
        parts = args[0]
        assert len(parts) == 3
        assert parts[0]["inline_data"]["data"] == "AAAA"
        assert "Transcribe literally" in parts[2]["text"]
        assert kwargs["model"] == "gemini-2.0-flash"
        fake_client.generate_text.assert_not_called()

    async def test_ocr_with_claims(self, settings, fake_client, gemini_reply):
        from services.image_extraction import ImageTextExtractor

        fake_client.generate.return_value = gemini_reply("BREAKING: taxes doubled in 2023")
        fake_client.generate_text.return_value = gemini_reply("- Taxes doubled in 2023\n")
        response = await ImageTextExtractor(fake_client, settings).run(["AAAA"], extract_claims=True)

        assert response.claims == "- Taxes doubled in 2023"
        assert "BREAKING: taxes doubled in 2023" in fake_client.generate_text.call_args.args[0]

    async def test_no_text_sentinel_skips_claims(self, settings, fake_client, gemini_reply):
        from services.image_extraction import ImageTextExtractor

        fake_client.generate.return_value = gemini_reply("No text detected in image.")
        response = await ImageTextExtractor(fake_client, settings).run(["AAAA"], extract_claims=True)

        assert response.extracted_text == ""
        assert response.claims is None
        fake_client.generate_text.assert_not_called()

    async def test_claims_failure_is_not_fatal(self, settings, fake_client, gemini_reply):
        from services.image_extraction import ImageTextExtractor

        fake_client.generate.return_value = gemini_reply("BREAKING: taxes doubled in 2023")
        fake_client.generate_text.side_effect = ProviderException("HTTP 503", provider_status=503)
        response = await ImageTextExtractor(fake_client, settings).run(["AAAA"], extract_claims=True)

        assert response.extracted_text == "BREAKING: taxes doubled in 2023"
        assert response.claims is None

    async def test_ocr_failure_propagates(self, settings, fake_client):
        from services.image_extraction import ImageTextExtractor

        fake_client.generate.side_effect = ProviderException("HTTP 500", provider_status=500)
        with pytest.raises(ProviderException):
            await ImageTextExtractor(fake_client, settings).run(["AAAA"])

    async def test_invalid_images_rejected_before_call(self, settings, fake_client):
        from services.image_extraction import ImageTextExtractor

        with pytest.raises(InputValidationException):
            await ImageTextExtractor(fake_client, settings).run([])
        fake_client.generate.assert_not_called()
