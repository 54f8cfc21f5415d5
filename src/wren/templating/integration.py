"""Kida environment setup.

Creates a kida Environment from wren's AppConfig. The environment is
created once when the app is built and shared by every dispatch.
"""

from kida import Environment, FileSystemLoader

from wren.config import AppConfig
from wren.templating.returns import Template


def create_environment(config: AppConfig) -> Environment | None:
    """Create a kida Environment, or ``None`` when no template_dir is set."""
    if config.template_dir is None:
        return None
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


def render_template(env: Environment, tpl: Template) -> str:
    """Render a full template to string."""
    template = env.get_template(tpl.name)
    return template.render(tpl.context)
