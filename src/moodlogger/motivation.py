"""Encouraging one-liners shown when a mood is picked."""

from __future__ import annotations

import random

from .models import Mood

MOTIVATION: dict[Mood, tuple[str, ...]] = {
    Mood.HAPPY: (
        "Your happiness comes from within - no one can dim your light! 🌟",
        "Spread and embrace this feeling as if it were a gift. 🎁",
        "This joy of yours makes the world a better place. ☀️",
    ),
    Mood.SAD: (
        "This feeling is completely normal - it will pass, and you will be stronger. 💙",
        "Keep your head up and give yourself time to heal. 🌱",
        "You are not alone in this feeling - reach out to others for support. 🤝",
    ),
    Mood.ANGRY: (
        "You are valid in this feeling, but take a deep breath and take back your control. 💪",
        "Channel this feeling into something positive. 🔥",
        "Take a moment to reflect and blow off some steam before acting. 🌬️",
    ),
    Mood.EXCITED: (
        "Your excitement is felt by those around you - you deserve this! 🎉",
        "Let this feeling carry you through the day. 🚀",
        "This energy is magnetic - let it guide you to your best self. ✨",
    ),
    Mood.CALM: (
        "The tranquility you feel is unmatched - enjoy your inner peace. 🧘",
        "Serenity is a feeling like no other - nothing can ruin your peace. ☮️",
        "Stay centered and let your calm anchor your decisions. ⚓️",
    ),
}


def pick_message(mood: Mood, rng: random.Random | None = None) -> str:
    messages = MOTIVATION.get(mood, ())
    if not messages:
        return ""
    return (rng or random).choice(messages)
