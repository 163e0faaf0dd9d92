"""
Certificate numbering service.

Allocates PREFIX-YYYY-NNNNNN certificate numbers.
"""

from deeddraw.services.certificate.numbering import (
    CertificateNumber,
    CertificateNumberService,
    format_certificate_number,
    parse_certificate_number,
)


__all__ = [
    "CertificateNumber",
    "CertificateNumberService",
    "format_certificate_number",
    "parse_certificate_number",
]
