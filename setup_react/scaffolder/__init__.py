"""setup-react scaffolder -- the individual project setup steps.

Quick usage::

    from setup_react.config import Config
    from setup_react.scaffolder import ProjectScaffolder

    scaffolder = ProjectScaffolder(Config(project_dir=Path("my-app")))
    await scaffolder.configure_aliases()
"""

from setup_react.scaffolder.generator import ProjectScaffolder
from setup_react.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectScaffolder",
    "TemplateRenderer",
]
