"""
Normalized response for a single Soisy interaction.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class SoisyResponse(BaseModel):
    success: bool
    message: str = ""
    transaction_hash: str | None = None
    code: int | None = None
    transaction_reference: str | None = None
    redirect_url: str | None = None
    data: dict[str, Any] = {}

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_payload(
        cls, data: dict[str, Any], shop_url: str | None = None
    ) -> "SoisyResponse":
        code = data.get("code")
        if "success" in data:
            success = bool(data["success"])
        else:
            success = code is not None and 200 <= int(code) < 300 and not data.get("errors")

        token = data.get("token")
        redirect_url = None
        if token and shop_url:
            redirect_url = f"{shop_url.rstrip('/')}/{token}"

        return cls(
            success=success,
            message=_extract_message(data),
            transaction_hash=data.get("transactionHash"),
            code=int(code) if code is not None else None,
            transaction_reference=token,
            redirect_url=redirect_url,
            data=dict(data),
        )

    @property
    def is_redirect(self) -> bool:
        return self.redirect_url is not None


def _extract_message(data: dict[str, Any]) -> str:
    if data.get("message"):
        return str(data["message"])

    errors = data.get("errors")
    if isinstance(errors, dict):
        # {"field": ["problem", ...]}
        return "; ".join(
            f"{field}: {', '.join(map(str, problems)) if isinstance(problems, list) else problems}"
            for field, problems in errors.items()
        )
    if isinstance(errors, list):
        return "; ".join(map(str, errors))
    return ""
