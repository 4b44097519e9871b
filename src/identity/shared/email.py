"""Structural email address checks used at signup."""


def normalize_email(address):
    return (address or "").strip().lower()


def is_valid_email(address):
    """Exactly one @, non-empty local and domain parts, a dotted domain, no whitespace."""
    if not address or any(ch in address for ch in " \t\n"):
        return False

    if address.count("@") != 1:
        return False

    local_part, domain_part = address.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part or ".." in local_part or ".." in domain_part:
        return False

    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False

    return not any(forbidden in address for forbidden in (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\"))
