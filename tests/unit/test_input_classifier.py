"""Tests for input classification and form screening."""

import pytest

from src.core.infrastructure.kv.memory import InMemoryKeyValueStore
from src.modules.admin_auth.application.form_security import FormSecurityService
from src.modules.admin_auth.domain.exceptions import (
    AccessDeniedError,
    InvalidInputError,
    SecurityViolationError,
)
from src.modules.admin_auth.infrastructure.input_classifier import (
    PatternInputClassifier,
    sanitize_input,
    sanitize_username,
)
from src.modules.admin_auth.infrastructure.stores import KVIpBanList


class TestPatternInputClassifier:
    @pytest.mark.parametrize(
        "value",
        [
            "admin",
            "admin@example.com",
            "first.last+tag@sub.example.co.uk",
            "under_score%test@example.com",
            "Abc123def456",
            "Jane Doe",
        ],
    )
    def test_allows_ordinary_values(self, value: str) -> None:
        result = PatternInputClassifier().classify({"email": value})
        assert result.allowed is True
        assert result.threats == []
        assert result.sanitized == {"email": value}

    @pytest.mark.parametrize(
        "value",
        [
            "<script>alert(1)</script>",
            "javascript:alert(1)",
            "x' OR 1=1",
            "a; DROP TABLE signups",
            "1 UNION SELECT password FROM users",
            '<img src=x onerror="x">',
        ],
    )
    def test_bans_high_severity(self, value: str) -> None:
        result = PatternInputClassifier().classify({"username": value})
        assert result.allowed is False
        assert result.should_ban is True
        assert all(t.field == "username" for t in result.threats)

    @pytest.mark.parametrize("value", ["a<b", "O'Brien", "x -- y", "{{ 7*7 }}"])
    def test_rejects_low_severity_without_ban(self, value: str) -> None:
        result = PatternInputClassifier().classify({"email": value})
        assert result.allowed is False
        assert result.should_ban is False

    def test_reports_worst_severity_per_kind(self) -> None:
        threats = PatternInputClassifier().scan("f", "<script>")
        assert [(t.type, t.severity) for t in threats] == [("XSS", "critical")]

    def test_sanitize_input(self) -> None:
        assert sanitize_input(" <b>hi</b> ") == "bhi/b"
        assert sanitize_input("it's; rm") == "its rm"

    def test_sanitize_username_keeps_quotes(self) -> None:
        assert sanitize_username("O'Brien") == "O'Brien"
        assert sanitize_username("a|b") == "ab"


@pytest.mark.anyio
class TestFormSecurityService:
    @pytest.fixture
    def ban_list(self) -> KVIpBanList:
        return KVIpBanList(InMemoryKeyValueStore())

    @pytest.fixture
    def service(self, ban_list) -> FormSecurityService:
        return FormSecurityService(PatternInputClassifier(), ban_list)

    async def test_clean_fields_pass(self, service) -> None:
        fields = {"username": "admin", "email": "admin@example.com"}
        assert await service.screen("10.0.0.1", fields) == fields

    async def test_low_severity_rejected(self, service, ban_list) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            await service.screen("10.0.0.1", {"email": "a<b@example.com"})
        assert exc_info.value.http_status_code == 400
        assert await ban_list.is_banned("10.0.0.1") is False

    async def test_high_severity_bans_ip(self, service, ban_list) -> None:
        with pytest.raises(SecurityViolationError) as exc_info:
            await service.screen("10.0.0.1", {"username": "<script>x</script>"})
        assert exc_info.value.http_status_code == 403
        assert await ban_list.is_banned("10.0.0.1") is True

        with pytest.raises(AccessDeniedError):
            await service.ensure_not_banned("10.0.0.1")

    async def test_other_ip_not_banned(self, service) -> None:
        await service.ensure_not_banned("10.0.0.2")
