import os

from app.bootstrap.components import Components


def get_components(
    env: str | None = None, config_path: str = "configuration"
) -> Components:
    """Build the bot's components; ``APP_ENV`` selects the environment."""
    return Components(env or os.getenv("APP_ENV", "development"), config_path)
