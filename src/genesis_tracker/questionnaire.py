"""Interactive profile questionnaire."""

import questionary
from questionary import Style

from .models import Profile

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("separator", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


def _is_number(value: str) -> bool:
    if not value:
        return True
    try:
        float(value)
        return True
    except ValueError:
        return False


def _default(value) -> str:
    return "" if value is None else str(value)


def _number(value: str, cast=float):
    if not value:
        return None
    return cast(float(value))


class ProfileQuestionnaire:
    """Collect personal data, prefilled with the current profile."""

    async def _ask_number(self, question: str, current, cast=float):
        answer = await questionary.text(
            question,
            default=_default(current),
            validate=lambda v: _is_number(v) or "Please enter a number",
            style=custom_style,
        ).ask_async()
        return _number(answer, cast)

    async def collect_profile(self, current: Profile | None = None) -> Profile:
        """Run the questionnaire and return the edited profile."""
        current = current or Profile()
        print("\n=== Personal Data ===\n")

        name = await questionary.text(
            "What's your name?",
            default=current.name or "",
            style=custom_style,
        ).ask_async()

        age = await self._ask_number("Age:", current.age, int)
        height = await self._ask_number("Height (cm):", current.height)
        weight = await self._ask_number("Weight (kg):", current.weight)
        body_fat = await self._ask_number("Body fat (%):", current.body_fat)

        set_targets = await questionary.confirm(
            "Would you like to set daily targets and training days?",
            default=False,
            style=custom_style,
        ).ask_async()

        calories, protein, sleep, training_days = (
            current.calories,
            current.protein,
            current.sleep,
            current.training_days,
        )
        if set_targets:
            calories = await self._ask_number("Daily calories (kcal):", calories)
            protein = await self._ask_number("Daily protein (g):", protein)
            sleep = await self._ask_number("Sleep (hours):", sleep)
            days = await questionary.select(
                "How many days per week do you train?",
                choices=["1", "2", "3", "4", "5", "6", "7"],
                default=str(training_days) if training_days else "4",
                style=custom_style,
            ).ask_async()
            training_days = int(days)

        return Profile(
            id=current.id,
            name=name or None,
            age=age,
            height=height,
            weight=weight,
            body_fat=body_fat,
            calories=calories,
            protein=protein,
            sleep=sleep,
            training_days=training_days,
        )
