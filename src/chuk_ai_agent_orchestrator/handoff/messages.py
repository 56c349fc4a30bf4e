# chuk_ai_agent_orchestrator/handoff/messages.py
"""Transfer announcements, looked up by (reason, target)."""

from __future__ import annotations

from chuk_ai_agent_orchestrator.models.enums import HandoffReason, ResponderType

R = ResponderType

GENERIC_ANNOUNCEMENT = "Let me connect you with a different assistant who might be better suited to help you."

FORCED_TEMPLATE = (
    "No specialists are available right now, so I'm connecting you with our {name} "
    "to keep you entertained while you wait!"
)

HANDOFF_MESSAGES: dict[HandoffReason, dict[ResponderType, str]] = {
    HandoffReason.EXPLICIT_REQUEST: {
        R.TECHNICAL: "Sounds technical! Let me bring in our Technical Assistant to dig into this with you.",
        R.WEBSITE_SUPPORT: "I can see you're having website issues! Let me connect you with our Website Issues Specialist.",
        R.JOKE: "I can tell you're looking for some laughs! Let me bring in our Adaptive Joke Master.",
        R.TRIVIA: "You're curious about fascinating facts! Our Trivia Master has plenty to share.",
        R.GIF: "For visual entertainment and fun GIFs, our GIF Master is perfect for that!",
        R.GENERAL: "Let me connect you with our General Assistant who can help with a wide range of topics.",
        R.ACCOUNT_SUPPORT: "I can see you have an account question! Our Account Support Specialist will take it from here.",
        R.BILLING_SUPPORT: "This looks like a billing question! Our Billing Support Specialist is the expert here.",
        R.OPERATOR_SUPPORT: "Let me connect you with our Customer Service Operator who can coordinate this for you.",
        R.HOLD_AGENT: "Let me connect you with our Hold Agent who will keep you updated while you wait.",
        R.STORY_TELLER: "Let me bring in our Story Teller who can craft an engaging short story for you!",
        R.RIDDLE_MASTER: "Our Riddle Master has brain teasers and puzzles to challenge your mind!",
        R.QUOTE_MASTER: "Our Quote Master has inspirational and entertaining quotes to share with you!",
        R.GAME_HOST: "Let me connect you with our Game Host who can start a fun interactive game!",
        R.MUSIC_GURU: "Our Music Guru can give you personalized music recommendations!",
        R.YOUTUBE_GURU: "Let me bring in our YouTube Guru who has funny videos and viral content for you!",
        R.DND_MASTER: "Let me bring in our D&D Master for an RPG-lite adventure with dice rolling and random encounters!",
    },
    HandoffReason.EXPERTISE_MISMATCH: {
        R.TECHNICAL: "This looks like a technical issue. Our Technical Assistant is better equipped to troubleshoot it.",
        R.WEBSITE_SUPPORT: "This seems to be a website functionality issue. Our Website Issues Specialist can help directly.",
        R.JOKE: "I think our Adaptive Joke Master would be perfect for bringing some humor to this conversation!",
        R.TRIVIA: "Our Trivia Master would love to share some fascinating knowledge about this topic!",
        R.GIF: "Let me bring in our GIF Master to add some visual fun to this conversation!",
        R.GENERAL: "Our General Assistant might have a fresh perspective on this topic.",
        R.ACCOUNT_SUPPORT: "This appears to be account-related. Our Account Support Specialist can handle it securely.",
        R.BILLING_SUPPORT: "This sounds like a billing matter. Our Billing Support Specialist has the access needed.",
        R.OPERATOR_SUPPORT: "This looks like a complex issue that would benefit from our Customer Service Operator.",
        R.HOLD_AGENT: "Let me connect you with our Hold Agent who specializes in managing wait times.",
        R.STORY_TELLER: "This seems perfect for our Story Teller who can craft a narrative around it!",
        R.RIDDLE_MASTER: "Our Riddle Master would love to create puzzles around this theme!",
        R.QUOTE_MASTER: "Our Quote Master has some fitting wisdom for this topic!",
        R.GAME_HOST: "Our Game Host could turn this into an interactive experience!",
        R.MUSIC_GURU: "Our Music Guru has great recommendations for this topic!",
        R.YOUTUBE_GURU: "Our YouTube Guru has videos that fit this topic perfectly!",
        R.DND_MASTER: "Our D&D Master could turn this topic into an interactive RPG adventure!",
    },
    HandoffReason.PERFORMANCE_DECLINE: {
        R.TECHNICAL: "Let me bring in our Technical Assistant for a different troubleshooting approach.",
        R.WEBSITE_SUPPORT: "Our Website Issues Specialist might have other approaches for this technical issue.",
        R.JOKE: "How about we lighten the mood? Our Adaptive Joke Master is great at turning things around!",
        R.TRIVIA: "Maybe our Trivia Master can share something interesting that helps more?",
        R.GIF: "Let's try something different! Our GIF Master can brighten things up.",
        R.GENERAL: "Let me bring in our General Assistant for a fresh approach to your question.",
        R.ACCOUNT_SUPPORT: "Our Account Support Specialist might have better solutions for your account concerns.",
        R.BILLING_SUPPORT: "Our Billing Support Specialist might be able to help better with this.",
        R.OPERATOR_SUPPORT: "Our Customer Service Operator might be able to coordinate a better solution.",
        R.HOLD_AGENT: "Let me connect you with our Hold Agent who can keep you updated while you wait.",
        R.STORY_TELLER: "How about a fresh story? Our Story Teller might have exactly what you need!",
        R.RIDDLE_MASTER: "Let's try some brain teasers! Our Riddle Master could engage your mind differently.",
        R.QUOTE_MASTER: "Our Quote Master might have the perfect words to help!",
        R.GAME_HOST: "Let's make this more interactive! Our Game Host can take it from here.",
        R.MUSIC_GURU: "Our Music Guru might have the perfect musical perspective to brighten things up!",
        R.YOUTUBE_GURU: "Let's try our YouTube Guru - they have funny videos that might be just right!",
        R.DND_MASTER: "How about something completely different? Our D&D Master can start an adventure!",
    },
    HandoffReason.CONVERSATION_STAGNATION: {
        R.TECHNICAL: "Let's get a fresh set of eyes on this - our Technical Assistant will take a look.",
        R.WEBSITE_SUPPORT: "Let's try our Website Issues Specialist - they might have alternative solutions.",
        R.JOKE: "How about we shake things up with some humor? Our Adaptive Joke Master is here!",
        R.TRIVIA: "Maybe our Trivia Master can share something fascinating to spark new ideas?",
        R.GIF: "Let's add some visual fun! Our GIF Master can liven up our conversation.",
        R.GENERAL: "Our General Assistant might bring a fresh perspective to keep things engaging.",
        R.ACCOUNT_SUPPORT: "Let me bring in our Account Support Specialist for a fresh approach.",
        R.BILLING_SUPPORT: "Our Billing Support Specialist might have other options to explore.",
        R.OPERATOR_SUPPORT: "Our Customer Service Operator can bring fresh coordination to resolve this.",
        R.HOLD_AGENT: "Let me connect you with our Hold Agent for fresh updates on your wait.",
        R.STORY_TELLER: "Let's shake things up with some storytelling from our Story Teller!",
        R.RIDDLE_MASTER: "How about a new challenge? Our Riddle Master has fresh puzzles!",
        R.QUOTE_MASTER: "Our Quote Master has inspiring words that might spark a new direction!",
        R.GAME_HOST: "Let's try something completely different! Our Game Host has a game ready.",
        R.MUSIC_GURU: "Our Music Guru can bring a whole new vibe with some music recommendations!",
        R.YOUTUBE_GURU: "Let's try our YouTube Guru for some viral videos to change the energy!",
        R.DND_MASTER: "Let's reinvent our conversation! Our D&D Master can start an epic RPG adventure!",
    },
}


def lookup_announcement(reason: HandoffReason, target: ResponderType, target_name: str | None = None) -> str:
    """Announcement for a transfer, falling back to a generic line."""
    if reason == HandoffReason.FORCED:
        return FORCED_TEMPLATE.format(name=target_name or target.value.replace("_", " "))
    return HANDOFF_MESSAGES.get(reason, {}).get(target, GENERIC_ANNOUNCEMENT)
