"""Vendor catalog — which worker image runs which vendor's workload.

Add a vendor by adding one line to ``VENDOR_IMAGES``.
"""

from __future__ import annotations

from task_spawner.core.errors import UnsupportedVendorError

VENDOR_IMAGES: dict[str, str] = {
    "bloomberg": "public.ecr.aws/soi/bloomberg-worker:latest",
}


def resolve_image(vendor: str) -> str:
    """Return the worker image for ``vendor``.

    Raises:
        UnsupportedVendorError: ``vendor`` is not in the catalog (case-sensitive).
    """
    try:
        return VENDOR_IMAGES[vendor]
    except KeyError:
        raise UnsupportedVendorError(vendor) from None


def supported_vendors() -> list[str]:
    """Sorted list of vendor keys."""
    return sorted(VENDOR_IMAGES)
