"""
Motivation Messages

Picks a line of encouragement from the player's pace percent, in the tone of
their chosen communication style.
"""

from typing import Dict, Tuple

from liferpg.models import CommunicationStyle

# (below 10%, below 50%, below 90%, 90% and up)
MESSAGES: Dict[CommunicationStyle, Tuple[str, str, str, str]] = {
    CommunicationStyle.DEFAULT: (
        "A start is a start. Or is it...",
        "Halfway is within reach. Don't stop.",
        "Great work. The finish line is close.",
        "Perfect. This day was not wasted.",
    ),
    CommunicationStyle.RUDE: (
        "You lazy lump... Get up and do something!",
        "Pathetic. My grandma works faster.",
        "Well, at least it's not zero. Still weak.",
        "Not bad. For a loser.",
    ),
    CommunicationStyle.CUTE: (
        "Kitty, time to wake up! 🐾",
        "You're trying, I can see it! You've got this! ✨",
        "Wow! You're a little ray of sunshine! Almost there! ☀️",
        "You're super-duper amazing! I'm so proud of you! ❤️",
    ),
    CommunicationStyle.INTELLECTUAL: (
        "Your productivity is approaching statistical noise.",
        "Analysis indicates moderate activity. Acceleration recommended.",
        "Efficiency metrics are above average. Continue observation.",
        "Phenomenal result. Expectations exceeded.",
    ),
    CommunicationStyle.FRIENDLY: (
        "Yo, bro! Rough day? Come on, pull it together!",
        "Decent pace, but we can do better, right?",
        "Nice one! Great pace!",
        "Legend! You crushed this day!",
    ),
}


def get_motivation_message(percentage: int, style: CommunicationStyle = CommunicationStyle.DEFAULT) -> str:
    """
    Motivation line for a pace percentage

    Args:
        percentage: Pace percent (0-100)
        style: Player's communication style

    Returns:
        Message text
    """
    low, mid, high, top = MESSAGES[CommunicationStyle(style)]
    if percentage < 10:
        return low
    if percentage < 50:
        return mid
    if percentage < 90:
        return high
    return top
