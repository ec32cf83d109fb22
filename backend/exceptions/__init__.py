from typing import Optional, Dict, Any

class FactCheckException(Exception):
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}

class InputValidationException(FactCheckException):
    status_code = 400

    def __init__(self, field: str, reason: str):
        super().__init__(reason, {"field": field, "reason": reason})

class AuthenticationException(FactCheckException):
    status_code = 401

    def __init__(self, reason: str = "Not signed in"):
        super().__init__(reason, {"reason": reason})

class QuotaExceededException(FactCheckException):
    status_code = 402

    def __init__(self, upgrade_url: str, used: int, limit: int, resets_at: str):
        super().__init__(
            "quota_exceeded",
            {"upgradeUrl": upgrade_url, "used": used, "limit": limit, "resetsAt": resets_at}
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, **self.details}

class ProviderException(FactCheckException):
    """Non-2xx or transport failure talking to the model provider."""

    def __init__(self, reason: str, provider_status: Optional[int] = None):
        self.status_code = 400 if provider_status == 400 else 500
        super().__init__(
            f"Gemini API error: {reason}",
            {"reason": reason, "provider_status": provider_status}
        )
