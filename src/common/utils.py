def mask_secret(value: str | None, *, visible_prefix: int = 0) -> str | None:
    """Mask a credential for display.

    Secrets are replaced entirely; with ``visible_prefix`` the first characters are kept.
    """
    if not value:
        return None
    if visible_prefix:
        return f"{value[:visible_prefix]}..."
    return "•" * 26
