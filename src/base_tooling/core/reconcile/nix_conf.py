"""Pure reconciliation of the experimental-features setting in nix.conf.

Existing lines are never edited. nix reads the file top to bottom: each
`experimental-features` line replaces the value set so far and each
`extra-experimental-features` line adds to it. Only flags missing from the
effective value get appended, so a second pass is a no-op.
"""

REQUIRED_FEATURES = ("nix-command", "flakes")

_FEATURES_KEY = "experimental-features"
_EXTRA_FEATURES_KEY = "extra-experimental-features"


def _parse_setting(line: str) -> tuple[str, str] | None:
    setting = line.split("#", 1)[0].strip()
    if "=" not in setting:
        return None
    key, value = setting.split("=", 1)
    return key.strip(), value.strip()


def enabled_features(content: str) -> tuple[bool, set[str]]:
    """Scan nix.conf content.

    Returns:
        (whether any feature line exists, the effective set of enabled flags)
    """
    has_feature_line = False
    flags: set[str] = set()
    for line in content.splitlines():
        parsed = _parse_setting(line)
        if parsed is None:
            continue
        key, value = parsed
        if key == _FEATURES_KEY:
            has_feature_line = True
            flags = set(value.split())
        elif key == _EXTRA_FEATURES_KEY:
            has_feature_line = True
            flags.update(value.split())
    return has_feature_line, flags


def ensure_experimental_features(
    content: str, required: tuple[str, ...] = REQUIRED_FEATURES
) -> str:
    """Return nix.conf content with every flag in `required` enabled.

    Missing flags go on an appended `extra-` line when the file already sets
    features, since a second base line would discard what is there.
    """
    has_feature_line, flags = enabled_features(content)
    missing = [flag for flag in required if flag not in flags]
    if not missing:
        return content

    key = _EXTRA_FEATURES_KEY if has_feature_line else _FEATURES_KEY
    if content and not content.endswith("\n"):
        content += "\n"
    return f"{content}{key} = {' '.join(missing)}\n"
