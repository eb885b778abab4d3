"""Bearer-token extraction shared by the REST and RPC adapters."""


class MissingCredentialsError(Exception):
    pass


def parse_bearer(raw: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` value.

    Exactly two whitespace-separated parts, scheme matched case-insensitively.
    """
    if raw is None:
        raise MissingCredentialsError("missing authorization")
    parts = raw.split()
    if len(parts) != 2:
        raise MissingCredentialsError("invalid authorization")
    scheme, token = parts
    if scheme.lower() != "bearer" or not token.strip():
        raise MissingCredentialsError("invalid authorization")
    return token.strip()
