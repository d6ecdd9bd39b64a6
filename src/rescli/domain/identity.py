"""Identity and instance naming rules.

The stored identity is an email-like ``local@domain`` string.  Everything
user-facing (whoami output, container name prefixes) uses only the part
before the first ``@``.
"""

from __future__ import annotations

from rescli.domain.types import InstanceType


def display_name(identity: str | None) -> str:
    """Return the display name for *identity*.

    Examples:
        >>> display_name("alice@example.com")
        'alice'
        >>> display_name("bob")
        'bob'
        >>> display_name("a@b@c")
        'a'
        >>> display_name(None)
        ''
    """
    if not identity:
        return ""
    return identity.split("@", 1)[0]


def container_name(owner: str, instance_type: InstanceType | str) -> str:
    """Deterministic container name for an instance owned by *owner*.

    Uniqueness is not checked here; the runtime rejects collisions.
    """
    return f"{owner}-{InstanceType(instance_type)}_instance"


def image_ref(image_repo: str, instance_type: InstanceType | str, tag: str) -> str:
    """Image reference such as ``expolab/resdb:arm64``."""
    return f"{image_repo}/{InstanceType(instance_type)}:{tag}"
