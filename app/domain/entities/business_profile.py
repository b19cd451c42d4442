from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BusinessProfile:
    name: str = ""
    easypaisa_account_name: str = ""
    easypaisa_account_number: str = ""
    easypaisa_qr_code_url: str = ""
    placeholder_url_markers: tuple[str, ...] = field(default_factory=lambda: ("your-domain.com",))
    confirmation_wait_hours: str = "1-3"

    @property
    def has_qr_code(self) -> bool:
        """A missing QR URL or one still pointing at a template placeholder counts as not configured."""
        url = (self.easypaisa_qr_code_url or "").strip()
        if not url:
            return False
        return not any(marker and marker in url for marker in self.placeholder_url_markers)
