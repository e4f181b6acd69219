"""Crisis resources shown next to the chat.

Static data only; numbers are US-centric and reviewed by hand.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Helpline:
    name: str
    number: str
    description: str
    available: str


@dataclass(frozen=True)
class ResourceCategory:
    category: str
    helplines: Tuple[Helpline, ...]


@dataclass(frozen=True)
class QuickContact:
    label: str
    detail: str
    href: str


@dataclass(frozen=True)
class SelfCareTip:
    title: str
    description: str


EMERGENCY_NOTICE = (
    "If you or someone you know is in immediate danger, call 911 "
    "or go to the nearest emergency room."
)

EMERGENCY_NUMBERS: Tuple[QuickContact, ...] = (
    QuickContact(label="988", detail="Suicide & Crisis Lifeline", href="tel:988"),
    QuickContact(label="Text HOME to 741741", detail="Crisis Text Line", href="sms:741741&body=HOME"),
)

CRISIS_RESOURCES: Tuple[ResourceCategory, ...] = (
    ResourceCategory(
        category="Emergency",
        helplines=(
            Helpline(
                name="National Suicide Prevention Lifeline",
                number="1800-5990019",
                description="24/7 free and confidential support for people in distress",
                available="24/7",
            ),
            Helpline(
                name="Crisis Text Line",
                number="Text HOME to 741741",
                description="Free, 24/7 crisis support via text message",
                available="24/7",
            ),
        ),
    ),
    ResourceCategory(
        category="Mental Health",
        helplines=(
            Helpline(
                name="NAMI Helpline",
                number="1-800-950-NAMI (6264)",
                description="National Alliance on Mental Illness - information and support",
                available="Mon-Fri 10am-10pm ET",
            ),
            Helpline(
                name="SAMHSA National Helpline",
                number="1-800-662-4357",
                description="Substance abuse and mental health services",
                available="24/7",
            ),
        ),
    ),
    ResourceCategory(
        category="Student Support",
        helplines=(
            Helpline(
                name="Student Mental Health Crisis Line",
                number="1-877-726-4727",
                description="Crisis support specifically for students",
                available="24/7",
            ),
            Helpline(
                name="The Steve Fund Crisis Text Line",
                number="Text STEVE to 741741",
                description="Mental health support for young people of color",
                available="24/7",
            ),
        ),
    ),
    ResourceCategory(
        category="Anxiety & Stress",
        helplines=(
            Helpline(
                name="Anxiety and Depression Association",
                number="240-485-1001",
                description="Resources and support for anxiety disorders",
                available="Mon-Fri 9am-5pm ET",
            ),
            Helpline(
                name="Disaster Distress Helpline",
                number="1-800-985-5990",
                description="Support for stress and anxiety during difficult times",
                available="24/7",
            ),
        ),
    ),
)

WARNING_SIGNS: Tuple[str, ...] = (
    "Thoughts of self-harm or suicide",
    "Feeling hopeless or having no reason to live",
    "Feeling trapped or in unbearable pain",
    "Being a burden to others",
    "Increased use of alcohol or drugs",
    "Acting anxious or agitated",
    "Withdrawing from family and friends",
    "Dramatic mood changes",
    "Sleeping too little or too much",
)

SELF_CARE_TIPS: Tuple[SelfCareTip, ...] = (
    SelfCareTip("Breathe", "Take slow, deep breaths. Inhale for 4 counts, hold for 4, exhale for 4."),
    SelfCareTip("Stay Hydrated", "Drink water and eat something if you haven't recently."),
    SelfCareTip("Reach Out", "Contact a trusted friend, family member, or use the helplines above."),
    SelfCareTip("Move Your Body", "Take a short walk or do gentle stretches to release tension."),
)


def crisis_resources_payload() -> Dict[str, Any]:
    return {
        "emergency": EMERGENCY_NOTICE,
        "quick_access": [asdict(c) for c in EMERGENCY_NUMBERS],
        "categories": [asdict(c) for c in CRISIS_RESOURCES],
        "warning_signs": list(WARNING_SIGNS),
        "self_care": [asdict(t) for t in SELF_CARE_TIPS],
    }
