from services.grounding import extract_grounding_sources, extract_search_queries


def _response(metadata):
    return {"candidates": [{"content": {"parts": [{"text": "{}"}]}, "groundingMetadata": metadata}]}


class TestExtractGroundingSources:
    """Tests for the structural grounding-metadata walk."""

    def test_single_grounding_chunk_without_title(self):
        raw = _response({"groundingChunks": [{"web": {"uri": "https://apnews.com/x"}}]})
        assert extract_grounding_sources(raw) == [{"url": "https://apnews.com/x", "title": "apnews.com"}]

    def test_grounding_chunk_title_kept(self):
        raw = _response({"groundingChunks": [{"web": {"uri": "https://www.bls.gov/cps/", "title": "BLS CPS"}}]})
        assert extract_grounding_sources(raw) == [{"url": "https://www.bls.gov/cps/", "title": "BLS CPS"}]

    def test_legacy_web_search_results(self):
        raw = _response({
            "webSearchQueries": [
                {"query": "moon cheese", "webSearchResults": [
                    {"url": "https://nasa.gov/moon", "title": "NASA"},
                    {"url": "https://www.space.com/moon"},
                ]}
            ]
        })
        assert extract_grounding_sources(raw) == [
            {"url": "https://nasa.gov/moon", "title": "NASA"},
            {"url": "https://www.space.com/moon", "title": "space.com"},
        ]

    def test_structural_walk_finds_nested_sources(self):
        raw = _response({
            "retrieval": {
                "searchResults": [
                    {"item": {"link": "https://reuters.com/a", "name": "Reuters"}},
                ],
            },
            "citationSources": [{"uri": "https://bbc.co.uk/news/1"}],
            "primarySourceUrl": "https://who.int/fact",
        })
        urls = [s["url"] for s in extract_grounding_sources(raw)]
        assert urls == ["https://reuters.com/a", "https://bbc.co.uk/news/1", "https://who.int/fact"]

    def test_keys_without_source_words_are_not_walked(self):
        raw = _response({"groundingSupports": [{"segment": {"uri": "https://ignored.example/x"}}]})
        assert extract_grounding_sources(raw) == []

    def test_invalid_and_duplicate_urls_dropped(self):
        raw = _response({
            "groundingChunks": [
                {"web": {"uri": "ftp://files.example.com/a"}},
                {"web": {"uri": "https://apnews.com/x"}},
                {"web": {"uri": "https://apnews.com/x", "title": "dup"}},
                {"web": {"uri": "not a url"}},
            ]
        })
        assert extract_grounding_sources(raw) == [{"url": "https://apnews.com/x", "title": "apnews.com"}]

    def test_malformed_nodes_skipped(self):
        raw = _response({
            "groundingChunks": [None, "string", {"web": "nope"}, {"web": {"uri": 12}}, {"web": {"uri": "https://ok.org/1"}}],
            "webSearchQueries": "not a list",
            "sources": [[], {"url": None}, {"url": "https://ok.org/2"}],
        })
        urls = [s["url"] for s in extract_grounding_sources(raw)]
        assert urls == ["https://ok.org/1", "https://ok.org/2"]

    def test_capped_at_limit(self):
        chunks = [{"web": {"uri": f"https://site{i}.com/"}} for i in range(8)]
        raw = _response({"groundingChunks": chunks})
        assert len(extract_grounding_sources(raw)) == 5
        assert len(extract_grounding_sources(raw, limit=3)) == 3

    def test_top_level_metadata(self):
        raw = {"groundingMetadata": {"groundingChunks": [{"web": {"uri": "https://a.org/"}}]}}
        assert extract_grounding_sources(raw)[0]["url"] == "https://a.org/"

    def test_no_metadata(self):
        assert extract_grounding_sources({"candidates": [{"content": {}}]}) == []
        assert extract_grounding_sources(None) == []
        assert extract_grounding_sources([]) == []

    def test_order_preserved_across_candidates(self, sample_grounded_response):
        urls = [s["url"] for s in extract_grounding_sources(sample_grounded_response)]
        assert urls == ["https://www.bls.gov/cps/", "https://apnews.com/article/jobs-report"]


class TestExtractSearchQueries:

    def test_string_queries(self, sample_grounded_response):
        assert extract_search_queries(sample_grounded_response) == ["unemployment rate 2023"]

    def test_legacy_query_objects(self):
        raw = _response({"webSearchQueries": [{"query": "a"}, "b", "a", 5]})
        assert extract_search_queries(raw) == ["a", "b"]

    def test_missing(self):
        assert extract_search_queries({}) == []
