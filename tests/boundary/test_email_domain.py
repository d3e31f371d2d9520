"""
Test suite for the registration email domain check.

DNS is never queried: dns.asyncresolver.resolve is patched.

System role: Verification of sign-up validation
"""

from unittest.mock import AsyncMock, patch

import dns.resolver
import pytest

from cognition_api.boundary.auth import email_domain
from cognition_api.boundary.auth.email_domain import check_email_domain, has_mx_records
from cognition_api.core.exceptions import InvalidEmailDomainError

RESOLVE = "dns.asyncresolver.resolve"


class TestHasMxRecords:
    @pytest.mark.asyncio
    async def test_domain_with_mx_is_accepted(self) -> None:
        with patch(RESOLVE, AsyncMock(return_value=["10 mx.example.com."])) as resolve:
            assert await has_mx_records("example.com") is True

        resolve.assert_awaited_once_with("example.com", "MX")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [dns.resolver.NoAnswer(), dns.resolver.NXDOMAIN(), dns.resolver.NoNameservers()],
    )
    async def test_domain_without_mx_is_rejected(self, error) -> None:
        # A domain with only an A record answers the MX query with NoAnswer
        with patch(RESOLVE, AsyncMock(side_effect=error)):
            assert await has_mx_records("a-record-only.example") is False


class TestCheckEmailDomain:
    @pytest.mark.asyncio
    async def test_returns_normalized_address(self) -> None:
        with patch.object(email_domain, "has_mx_records", AsyncMock(return_value=True)):
            assert await check_email_domain("Student@Example.com") == "Student@example.com"

    @pytest.mark.asyncio
    async def test_domain_without_mx_is_invalid(self) -> None:
        with patch.object(email_domain, "has_mx_records", AsyncMock(return_value=False)):
            with pytest.raises(InvalidEmailDomainError) as exc_info:
                await check_email_domain("student@no-mail-berries.co")

        assert exc_info.value.message == "Invalid email domain"

    @pytest.mark.asyncio
    async def test_malformed_address_never_reaches_dns(self) -> None:
        with patch.object(email_domain, "has_mx_records", AsyncMock()) as lookup:
            with pytest.raises(InvalidEmailDomainError):
                await check_email_domain("not-an-email")

        lookup.assert_not_awaited()
