"""Choice resolution: command-line selections first, prompts for the rest."""

from __future__ import annotations

from .errors import ResolutionError
from .interfaces import Prompter, Question
from .models import Framework, Language, Selection

FRAMEWORK_QUESTION = Question(
    name="framework",
    message="Select a framework",
    choices=[f.value for f in Framework],
)

LANGUAGE_QUESTION = Question(
    name="language",
    message="Select a language",
    choices=[lang.value for lang in Language],
)


def _validate_project_name(project_name: str) -> str:
    if not project_name.strip():
        raise ResolutionError("Project name must not be empty")
    if project_name != project_name.strip():
        raise ResolutionError(
            f"Project name '{project_name}' must not start or end with whitespace"
        )
    if project_name in (".", "..") or "/" in project_name or "\\" in project_name:
        raise ResolutionError(
            f"Project name '{project_name}' must be a single directory name"
        )
    return project_name


def resolve_selection(
    project_name: str,
    framework: Framework | str | None,
    language: Language | str | None,
    prompter: Prompter,
) -> Selection:
    """Build a complete ``Selection``, asking only for what is missing.

    Dimensions already given are never asked again. When one or both are
    missing they are asked together in a single ``prompter.choose`` round;
    when neither is missing the prompter is not touched.

    Raises:
        ResolutionError: If the project name is unusable or an answer falls
            outside the supported choices.
    """
    name = _validate_project_name(project_name)

    questions: list[Question] = []
    if framework is None:
        questions.append(FRAMEWORK_QUESTION)
    if language is None:
        questions.append(LANGUAGE_QUESTION)

    if questions:
        answers = prompter.choose(questions)
        framework = framework if framework is not None else answers.get("framework")
        language = language if language is not None else answers.get("language")

    if framework is None or language is None:
        raise ResolutionError("No framework or language selected, please try again")

    try:
        return Selection(
            project_name=name,
            framework=Framework(framework),
            language=Language(language),
        )
    except ValueError as exc:
        raise ResolutionError(str(exc)) from exc
