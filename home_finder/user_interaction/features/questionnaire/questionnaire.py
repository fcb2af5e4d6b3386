"""
home_finder/user_interaction/features/questionnaire/questionnaire.py

Terminal questionnaire that collects home-buying preferences.
Handles:
  - Printing each question with numbered options
  - Parsing numbered answers (comma-separated for multi-select)
  - Enforcing selection limits and re-asking on invalid input
  - Validating the final answers into a Preferences object
"""
from typing import Any, Callable, Dict, List, Optional

from home_finder.models import Preferences
from home_finder.user_interaction.features.questions import QUESTIONS


class Questionnaire:
    """
    Asks the questionnaire on a terminal-like interface and returns Preferences.
    Blank answers skip a question.
    """

    def __init__(
        self,
        questions: Optional[List[Dict[str, Any]]] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self.questions = questions if questions is not None else QUESTIONS
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.answers: Dict[str, Any] = {}

    def _show(self, question: Dict[str, Any]) -> None:
        self.output_fn(f"\n{question['title']}")
        if question.get("subtitle"):
            self.output_fn(f"  {question['subtitle']}")
        for idx, option in enumerate(question.get("options", []), start=1):
            self.output_fn(f"  {idx}. {option['label']} - {option['description']}")

    def _parse_choices(self, question: Dict[str, Any], raw: str) -> List[str]:
        """
        Translate '1, 3' into option values.

        Raises:
            ValueError: On non-numeric, out-of-range, repeated or too many choices.
        """
        options = question["options"]
        picks: List[str] = []
        for token in raw.split(","):
            token = token.strip()
            if not token.isdigit() or not 1 <= int(token) <= len(options):
                raise ValueError(f"Please choose numbers between 1 and {len(options)}.")
            value = options[int(token) - 1]["value"]
            if value in picks:
                raise ValueError("Each option can only be chosen once.")
            picks.append(value)

        limit = 1 if question["type"] == "single" else question.get("max_selections", len(options))
        if len(picks) > limit:
            raise ValueError(f"Please choose at most {limit} option(s).")
        return picks

    def ask(self, question: Dict[str, Any]) -> Any:
        """Ask one question until a valid (or blank) answer is given."""
        self._show(question)
        while True:
            raw = self.input_fn("> ").strip()

            if question["type"] == "text":
                return raw or None
            if not raw:
                return [] if question["type"] == "multiple" else None

            try:
                picks = self._parse_choices(question, raw)
            except ValueError as e:
                self.output_fn(str(e))
                continue
            return picks if question["type"] == "multiple" else picks[0]

    def run(self) -> Preferences:
        """
        Conduct the questionnaire.

        Returns:
            Schema-validated Preferences.
        """
        for question in self.questions:
            self.answers[question["id"]] = self.ask(question)
        return Preferences.from_dict(self.answers)
