"""Mapping from a (framework, language) choice to a remote template."""

from __future__ import annotations

from .config import TemplateSettings
from .errors import ResolutionError
from .models import Framework, Language, TemplateRef


def locate_template(
    framework: Framework | str,
    language: Language | str,
    settings: TemplateSettings | None = None,
) -> TemplateRef:
    """Return the template reference for a framework/language pair.

    The framework picks the repository (``<prefix>-<framework>-template``) and
    the language picks the branch: the JS variant lives on ``js_branch`` and
    the TypeScript variant on ``ts_branch``.

    Examples::

        str(locate_template("react", "ts")) -> "github:chencanxi/ccx-react-template#ts"
        str(locate_template("vue", "js"))   -> "github:chencanxi/ccx-vue-template#main"

    Raises:
        ResolutionError: If either value is outside its enumeration.
    """
    settings = settings or TemplateSettings()
    try:
        framework = Framework(framework)
        language = Language(language)
    except ValueError as exc:
        raise ResolutionError(str(exc)) from exc

    branch = settings.js_branch if language is Language.JS else settings.ts_branch
    return TemplateRef(
        host=settings.host,
        org=settings.org,
        repo=f"{settings.prefix}-{framework.value}-template",
        branch=branch,
    )
