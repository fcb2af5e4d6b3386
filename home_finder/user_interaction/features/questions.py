"""
home_finder/user_interaction/features/questions.py

Defines the questionnaire: each question's id (the answers key), wording,
type ('single', 'multiple' or 'text'), selection limit and options.

Edit this file to change wording or options without touching the
Questionnaire logic.
"""

QUESTIONS = [
    {
        "id": "experience",
        "title": "What's your home buying experience?",
        "type": "single",
        "options": [
            {"value": "first-time",  "label": "First-time buyer", "description": "New to the home buying process"},
            {"value": "experienced", "label": "Experienced buyer", "description": "Bought homes before"},
            {"value": "investor",    "label": "Investor", "description": "Looking for investment properties"},
        ],
    },
    {
        "id": "budget",
        "title": "What's your budget range?",
        "type": "single",
        "options": [
            {"value": "under-200k", "label": "Under $200K", "description": "Starter homes and condos"},
            {"value": "200k-400k",  "label": "$200K - $400K", "description": "Mid-range family homes"},
            {"value": "400k-600k",  "label": "$400K - $600K", "description": "Premium properties"},
            {"value": "600k-1m",    "label": "$600K - $1M", "description": "Luxury homes"},
            {"value": "over-1m",    "label": "Over $1M", "description": "High-end luxury"},
        ],
    },
    {
        "id": "lifestyle",
        "title": "What's most important to you?",
        "subtitle": "Select your top 3 priorities",
        "type": "multiple",
        "max_selections": 3,
        "options": [
            {"value": "schools",     "label": "Great Schools", "description": "Top-rated education"},
            {"value": "safety",      "label": "Safety & Security", "description": "Low crime rates"},
            {"value": "nightlife",   "label": "Nightlife & Entertainment", "description": "Bars, clubs, events"},
            {"value": "restaurants", "label": "Dining Scene", "description": "Great food options"},
            {"value": "commute",     "label": "Easy Commute", "description": "Short travel times"},
            {"value": "family",      "label": "Near Family", "description": "Close to loved ones"},
        ],
    },
    {
        "id": "dealbreakers",
        "title": "What are your deal breakers?",
        "subtitle": "Things you absolutely want to avoid",
        "type": "multiple",
        "max_selections": 5,
        "options": [
            {"value": "high-crime",   "label": "High Crime Rate", "description": "Safety concerns"},
            {"value": "poor-schools", "label": "Poor School Districts", "description": "Low-rated education"},
            {"value": "long-commute", "label": "Long Commute", "description": "Over 45 minutes"},
            {"value": "no-nightlife", "label": "Limited Nightlife", "description": "Quiet evenings only"},
            {"value": "expensive",    "label": "High Cost of Living", "description": "Above budget lifestyle"},
            {"value": "isolated",     "label": "Too Rural/Isolated", "description": "Far from amenities"},
        ],
    },
    {
        "id": "location",
        "title": "Any location preferences?",
        "subtitle": "City and state you'd like to search, e.g. 'Austin, TX'",
        "type": "text",
    },
]
