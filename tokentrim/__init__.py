import os

__version__ = "0.3.0"


def data_dir() -> str:
    """Where tokentrim looks for config.json and writes debug.log.

    TOKENTRIM_HOME wins when set; otherwise %APPDATA%/tokentrim on Windows
    and ~/.tokentrim elsewhere.
    """
    override = os.environ.get("TOKENTRIM_HOME")
    if override:
        return override
    base = os.path.expanduser("~")
    if os.name == "nt":
        base = os.environ.get("APPDATA", os.path.join(base, "AppData", "Roaming"))
        return os.path.join(base, "tokentrim")
    return os.path.join(base, ".tokentrim")
