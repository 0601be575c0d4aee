import logging
from collections.abc import Mapping
from enum import Enum

from . import prompts
from .config import load_settings
from .errors import InvalidHistoryError
from .gemini import USER, GeminiClient, parse_history

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CREATE_RESUME = "create-resume"
    SEARCH_JOBS = "search-jobs"
    SIMULATE_INTERVIEW = "simulate-interview"
    REVIEW_RESUME = "review-resume"
    IDEAL_PROFESSION = "ideal-profession"
    FREE_COURSES = "free-courses"
    FAIR_SALARY = "fair-salary"
    YOUTH_PROGRAM = "youth-program"
    WELCOME = "welcome"


# Identifiers used by the original Portuguese frontend
ACTION_ALIASES = {
    "criar-curriculo": Action.CREATE_RESUME,
    "buscar-vagas": Action.SEARCH_JOBS,
    "simular-entrevista": Action.SIMULATE_INTERVIEW,
    "avaliar-curriculo": Action.REVIEW_RESUME,
    "profissao-ideal": Action.IDEAL_PROFESSION,
    "cursos-gratuitos": Action.FREE_COURSES,
    "salario-justo": Action.FAIR_SALARY,
    "jovem-aprendiz": Action.YOUTH_PROGRAM,
    "boas-vindas": Action.WELCOME,
}

FIELD_ALIASES = {
    "nome": "name",
    "idade": "age",
    "cidade": "city",
    "objetivo": "objective",
    "formacao": "education",
    "experiencia": "experience",
    "habilidades": "skills",
    "contato": "contact",
    "texto": "text",
    "gostos": "interests",
    "cargo": "role",
}

PROMPT_BUILDERS = {
    Action.CREATE_RESUME: prompts.create_resume,
    Action.SEARCH_JOBS: prompts.search_jobs,
    Action.REVIEW_RESUME: prompts.review_resume,
    Action.IDEAL_PROFESSION: prompts.ideal_profession,
    Action.FREE_COURSES: prompts.free_courses,
    Action.FAIR_SALARY: prompts.fair_salary,
    Action.YOUTH_PROGRAM: prompts.youth_program,
    Action.WELCOME: prompts.welcome,
}


def resolve_action(raw):
    """Map an identifier (or legacy alias) to an Action; anything unknown is WELCOME."""
    if isinstance(raw, Action):
        return raw
    if not isinstance(raw, str):
        logger.info("Non-string action %r, falling back to welcome", raw)
        return Action.WELCOME
    if raw in ACTION_ALIASES:
        return ACTION_ALIASES[raw]
    try:
        return Action(raw)
    except ValueError:
        logger.info("Unknown action %r, falling back to welcome", raw)
        return Action.WELCOME


def normalize_fields(fields):
    if fields is None:
        return {}
    if not isinstance(fields, Mapping):
        raise TypeError(f"fields must be an object, got {type(fields).__name__}")

    normalized = {}
    for key, value in fields.items():
        normalized.setdefault(FIELD_ALIASES.get(key, key), value)
    # English names win over legacy aliases when both are sent
    for key, value in fields.items():
        if key not in FIELD_ALIASES:
            normalized[key] = value
    return normalized


def interview_step(history):
    """Return (prompt, context) for the next interview turn.

    An empty history starts the interview with the fixed opening instruction.
    Otherwise the last user turn becomes the prompt and the earlier turns are
    sent along as context.
    """
    if not history:
        return prompts.INTERVIEW_OPENING, ()
    last = history[-1]
    if last.role != USER:
        raise InvalidHistoryError("Interview history must end with a user turn")
    return last.text, history[:-1]


class ActionDispatcher:
    """Routes an action to its prompt and makes exactly one Gemini call."""

    def __init__(self, client):
        self.client = client

    def handle(self, action, fields=None, history=None):
        action = resolve_action(action)
        fields = normalize_fields(fields)
        logger.info("Dispatching action %s", action.value)

        if action is Action.SIMULATE_INTERVIEW:
            prompt, context = interview_step(parse_history(history))
            result = self.client.generate(prompt, context)
            return {
                "result": result.text,
                "history": [turn.to_dict() for turn in result.history],
            }

        prompt = PROMPT_BUILDERS[action](fields)
        result = self.client.generate(prompt)
        return {"result": result.text}


def handle_action(action, fields=None, history=None, client=None):
    """One-shot helper; builds a client from the environment when none is given."""
    if client is None:
        client = GeminiClient(load_settings())
    return ActionDispatcher(client).handle(action, fields, history)
