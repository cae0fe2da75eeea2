import pytest

from clarityhq.services import reflection_coach as coach


@pytest.mark.parametrize(
    "completed, total, expected",
    [(0, 0, 0.0), (0, 4, 0.0), (1, 4, 25.0), (3, 4, 75.0), (2, 2, 100.0)],
)
def test_progress_percent(completed, total, expected) -> None:
    assert coach.progress_percent(completed, total) == expected


def test_reflection_prompt_tiers() -> None:
    assert coach.reflection_prompt(3, 4, 30, lambda: 0.0) == coach.HIGH_COMPLETION_PROMPTS[0]
    assert coach.reflection_prompt(1, 4, 30, lambda: 0.0) == coach.PARTIAL_COMPLETION_PROMPTS[0]
    assert coach.reflection_prompt(0, 4, 30, lambda: 0.0) == coach.LOW_COMPLETION_PROMPTS[0]


def test_low_completion_prompt_mentions_focus_time() -> None:
    prompt = coach.reflection_prompt(0, 3, 25, lambda: 0.2)
    assert prompt == "You showed up and tried for 25 minutes. What did you learn?"


@pytest.mark.parametrize(
    "completed, total, expected",
    [
        (0, 3, "You dedicated 20 minutes to focus time today. That's a win!"),
        (1, 3, "You focused for 20 minutes and made progress. That's what matters!"),
        (3, 3, "You completed everything you set out to do. Amazing focus!"),
        (0, 0, "You spent 20 minutes building your focus muscle. Every minute counts!"),
    ],
)
def test_celebration(completed, total, expected) -> None:
    assert coach.celebration(completed, total, 20) == expected


def test_growth_message_pools() -> None:
    assert coach.growth_message(80, lambda: 0.99) == coach.GROWTH_MESSAGES[3]
    assert coach.growth_message(50, lambda: 0.99) == coach.GROWTH_MESSAGES[7]
    assert coach.growth_message(10, lambda: 0.0) == coach.GROWTH_MESSAGES[4]


@pytest.mark.parametrize(
    "reflection, expected_start",
    [
        ("", "That's okay!"),
        ("   ", "That's okay!"),
        (None, "That's okay!"),
        ("I got distracted by my phone", "Noticing distractions"),
        ("It was really difficult", "It takes courage"),
        ("Music helped a lot", "Great noticing!"),
        ("Nothing special", "Thank you for reflecting."),
    ],
)
def test_respond_to_reflection(reflection, expected_start) -> None:
    assert coach.respond_to_reflection(reflection).startswith(expected_start)


def test_distraction_response_wins_over_help() -> None:
    response = coach.respond_to_reflection("Headphones helped but I was still distracted")
    assert response.startswith("Noticing distractions")


def test_coaching_card_rounds_progress() -> None:
    card = coach.build_coaching_card(1, 3, 30, lambda: 0.0)
    assert card.progress_percent == 33.33
    assert card.prompt == coach.PARTIAL_COMPLETION_PROMPTS[0]
    assert card.quote == coach.MOTIVATIONAL_QUOTES[0]
