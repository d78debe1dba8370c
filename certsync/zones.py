"""Hosted zone resolution from certificate tags."""

from __future__ import annotations

from typing import Iterable

from certsync.base.certificates import CertificateBlueprint
from certsync.base.config import DEFAULT_ZONE_TAG_KEY
from certsync.base.models import Tag


def resolve_zone_id(tags: Iterable[Tag], tag_key: str = DEFAULT_ZONE_TAG_KEY) -> str | None:
    """Return the value of the first tag named *tag_key*, or ``None``.

    A missing tag is a normal outcome: the certificate is simply not
    associated with a managed zone.
    """
    for tag in tags:
        if tag.key == tag_key:
            return tag.value
    return None


async def resolve_zone_for_certificate(
    certificates: CertificateBlueprint,
    certificate_arn: str,
    tag_key: str = DEFAULT_ZONE_TAG_KEY,
) -> str | None:
    """Fetch a certificate's tags and resolve its hosted zone.

    Lookup failures propagate unchanged.
    """
    tags = await certificates.alist_tags(certificate_arn)  # type: ignore[attr-defined]
    return resolve_zone_id(tags, tag_key)
