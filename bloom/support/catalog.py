"""
Static support content: journaling prompts, crisis and support lines, and
coping tips shown next to them.
"""

from typing import List, Optional

from bloom.support.schemas import JournalPrompt, SupportResource, WellnessTip

PROMPTS: List[JournalPrompt] = [
    JournalPrompt(
        id="gratitude",
        category="Gratitude",
        prompt="What are three things you're grateful for today, and why do they matter to you?",
        description="Focus on appreciation and positive mindset",
    ),
    JournalPrompt(
        id="reflection",
        category="Self-Reflection",
        prompt="What emotion did you feel most strongly today? What triggered it, and how did you handle it?",
        description="Explore your emotional landscape",
    ),
    JournalPrompt(
        id="growth",
        category="Personal Growth",
        prompt="What's one small step you took today toward becoming the person you want to be?",
        description="Track your personal development",
    ),
    JournalPrompt(
        id="mindfulness",
        category="Mindfulness",
        prompt="Describe a moment today when you felt completely present. What were you doing, seeing, or feeling?",
        description="Cultivate awareness and presence",
    ),
    JournalPrompt(
        id="relationships",
        category="Relationships",
        prompt="How did you connect with someone today? What did you learn about them or yourself?",
        description="Strengthen your connections",
    ),
    JournalPrompt(
        id="challenges",
        category="Challenges",
        prompt="What challenge did you face today, and what strength did you discover in yourself while dealing with it?",
        description="Build resilience and self-awareness",
    ),
    JournalPrompt(
        id="dreams",
        category="Dreams & Goals",
        prompt="What dream or goal felt a little closer today? What specific action brought you closer to it?",
        description="Manifest your aspirations",
    ),
    JournalPrompt(
        id="self-care",
        category="Self-Care",
        prompt="How did you take care of yourself today? What does your body, mind, or soul need right now?",
        description="Prioritize your wellbeing",
    ),
]

_EMERGENCY = "For immediate life-threatening emergencies."

RESOURCES: List[SupportResource] = [
    # Crisis lines
    SupportResource(
        id="suicide-prevention",
        name="National Suicide Prevention Lifeline",
        description="Free and confidential emotional support for people in suicidal crisis or emotional distress.",
        phone="988",
        website="https://suicidepreventionlifeline.org",
        availability="24/7",
        type="crisis",
        country="US",
    ),
    SupportResource(
        id="crisis-text",
        name="Crisis Text Line",
        description="Free, 24/7 support for those in crisis. Text HOME to connect with a counselor.",
        phone="741741",
        website="https://crisistextline.org",
        availability="24/7",
        type="crisis",
        country="US",
    ),
    SupportResource(
        id="samaritans",
        name="Samaritans",
        description="Emotional support for anyone in emotional distress, struggling to cope, or at risk of suicide.",
        phone="116 123",
        website="https://samaritans.org",
        availability="24/7",
        type="crisis",
        country="UK",
    ),
    SupportResource(
        id="befrienders-kenya",
        name="Befrienders Kenya",
        description="Emotional support and suicide prevention services for anyone in distress.",
        phone="+254 722 178 177",
        website="https://www.facebook.com/BefriendersKenya",
        availability="24/7",
        type="crisis",
        country="Kenya",
    ),
    SupportResource(
        id="mental-health-kenya",
        name="Mental Health Kenya",
        description="Free mental health support and counseling services.",
        phone="+254 20 3000378",
        website="https://www.mentalhealthkenya.org",
        availability="Mon-Fri 8am-5pm",
        type="support",
        country="Kenya",
    ),
    SupportResource(
        id="inuka-coaches",
        name="Inuka Coaches",
        description="Professional counseling and mental health support services.",
        phone="+254 701 163 050",
        website="https://www.linkedin.com/company/inuka-coaches",
        availability="Mon-Fri 9am-6pm",
        type="support",
        country="Kenya",
    ),
    SupportResource(
        id="usikimye",
        name="Usikimye",
        description="Mental health awareness and support organization providing counseling services.",
        phone="+254 794 814 738",
        website="https://www.facebook.com/usikimyeke",
        availability="Mon-Fri 8am-5pm",
        type="support",
        country="Kenya",
    ),
    SupportResource(
        id="kapc-kenya",
        name="Kenya Association of Professional Counsellors",
        description="Professional counseling services and mental health support across Kenya.",
        phone="+254 722 516 799",
        website="https://kapc.or.ke",
        availability="Mon-Fri 8am-6pm",
        type="support",
        country="Kenya",
    ),
    # Support
    SupportResource(
        id="nami",
        name="NAMI Support",
        description="National Alliance on Mental Illness provides support, education and advocacy.",
        phone="1-800-950-6264",
        website="https://nami.org",
        availability="Mon-Fri 10am-10pm ET",
        type="support",
        country="US",
    ),
    SupportResource(
        id="mind",
        name="Mind UK",
        description="Mental health charity providing advice and support to anyone experiencing mental health problems.",
        phone="0300 123 3393",
        website="https://mind.org.uk",
        availability="Mon-Fri 9am-6pm",
        type="support",
        country="UK",
    ),
    # Emergency
    SupportResource(
        id="emergency-us", name="Emergency Services", description=_EMERGENCY,
        phone="911", availability="24/7", type="emergency", country="US",
    ),
    SupportResource(
        id="emergency-uk", name="Emergency Services", description=_EMERGENCY,
        phone="999", availability="24/7", type="emergency", country="UK",
    ),
    SupportResource(
        id="emergency-kenya", name="Emergency Services", description=_EMERGENCY,
        phone="999 or 911", availability="24/7", type="emergency", country="Kenya",
    ),
    SupportResource(
        id="kenya-police", name="Kenya Police", description="Police emergency services.",
        phone="999 or 112", availability="24/7", type="emergency", country="Kenya",
    ),
]

TIPS: List[WellnessTip] = [
    WellnessTip(
        title="Grounding Technique (5-4-3-2-1)",
        description="Name 5 things you can see, 4 you can touch, 3 you can hear, 2 you can smell, 1 you can taste.",
    ),
    WellnessTip(
        title="Deep Breathing",
        description="Breathe in for 4 counts, hold for 4, exhale for 6. Repeat until you feel calmer.",
    ),
    WellnessTip(
        title="Reach Out",
        description="Contact a trusted friend, family member, or mental health professional.",
    ),
    WellnessTip(
        title="Safe Space",
        description="Go to a place where you feel safe and comfortable, away from stressors.",
    ),
    WellnessTip(
        title="Professional Help",
        description="Don't hesitate to seek professional mental health support when needed.",
    ),
    WellnessTip(
        title="Community Support (Harambee Spirit)",
        description="Reach out to your community, family, or church group. In Kenya, collective support is a source of strength.",
    ),
    WellnessTip(
        title="Nature Connection",
        description="Spend time in Kenya's beautiful nature - visit a park, sit under a tree, or take a walk in your neighborhood.",
    ),
    WellnessTip(
        title="Prayer and Meditation",
        description="If you're spiritual, prayer, meditation, or quiet reflection can provide comfort and peace.",
    ),
    WellnessTip(
        title="Traditional Healing",
        description="Consider combining traditional healing practices with modern mental health support for holistic wellness.",
    ),
]


def prompt_categories() -> List[str]:
    """Distinct categories in catalogue order."""
    return list(dict.fromkeys(p.category for p in PROMPTS))


def find_prompts(category: Optional[str] = None) -> List[JournalPrompt]:
    if not category:
        return list(PROMPTS)
    wanted = category.strip().lower()
    return [p for p in PROMPTS if p.category.lower() == wanted or p.id == wanted]


def find_resources(country: Optional[str] = None, type: Optional[str] = None) -> List[SupportResource]:
    results = RESOURCES
    if country:
        results = [r for r in results if r.country.lower() == country.strip().lower()]
    if type:
        results = [r for r in results if r.type == type]
    return list(results)
