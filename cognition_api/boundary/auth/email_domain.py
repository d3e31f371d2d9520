"""
Email domain deliverability check.

Registration rejects addresses whose domain publishes no mail exchanger.
Only MX records count; a domain that merely resolves to an A or AAAA
address is rejected.

Dependencies: email_validator, dnspython
System role: Sign-up validation
"""

import logging

import dns.asyncresolver
import dns.exception
from email_validator import EmailNotValidError, validate_email

from cognition_api.core.exceptions import InvalidEmailDomainError

logger = logging.getLogger(__name__)


async def has_mx_records(domain: str) -> bool:
    """True when the domain answers an MX query with at least one record."""
    try:
        answer = await dns.asyncresolver.resolve(domain, "MX")
    except dns.exception.DNSException as e:
        logger.info("MX lookup failed", extra={"domain": domain, "error": type(e).__name__})
        return False
    return len(answer) > 0


async def check_email_domain(email: str) -> str:
    """
    Validate the address and confirm its domain accepts mail.

    Returns:
        str: Normalized email address

    Raises:
        InvalidEmailDomainError: If the address is malformed or has no MX records
    """
    try:
        result = validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        logger.info("Rejected malformed email", extra={"email": email, "reason": str(e)})
        raise InvalidEmailDomainError("Invalid email domain", field="email") from e

    if not await has_mx_records(result.ascii_domain):
        logger.info("Rejected email domain without MX", extra={"email": email})
        raise InvalidEmailDomainError("Invalid email domain", field="email")
    return result.normalized
