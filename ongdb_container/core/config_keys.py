"""Translation of ONgDB configuration keys into entrypoint environment names."""

from .constants import CONFIG_KEY_PREFIX


def format_configuration_key(plain_config_key: str) -> str:
    """Translate a dotted configuration key into an environment variable name.

    The image entrypoint reads ``NEO4J_*`` variables and maps ``_`` back to
    ``.`` and ``__`` back to ``_``, so literal underscores are doubled before
    dots are replaced. For example ``dbms.security.procedures.unrestricted``
    becomes ``NEO4J_dbms_security_procedures_unrestricted``.

    The translation is applied exactly once per key. It is not idempotent:
    feeding an already translated name back in doubles its underscores again
    and adds a second prefix.

    Args:
        plain_config_key: Key as written in ``neo4j.conf``

    Returns:
        Environment variable name understood by the image
    """
    escaped = plain_config_key.replace("_", "__").replace(".", "_")
    return f"{CONFIG_KEY_PREFIX}{escaped}"
