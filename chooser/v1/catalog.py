# built-in templates seeded at deployment time
from typing import Any, Dict, List

_WEEK_TIMES = [
    "8:00 AM", "9:00 AM", "10:00 AM", "11:00 AM", "12:00 PM", "1:00 PM",
    "2:00 PM", "3:00 PM", "4:00 PM", "5:00 PM", "6:00 PM", "7:00 PM", "8:00 PM",
]

TEMPLATES: List[Dict[str, Any]] = [
    {
        "slug": "weekly_time",
        "name": "Weekly Time Selector",
        "description": "Select available times across a week",
        "template_data": {
            "type": "weekly_time",
            "instructions": (
                "Click on each of the timeslots below to toggle it from green (ok) "
                "to yellow (less preferred) to red (no) to indicate what times you "
                "can attend this event during the week."
            ),
            "adminInstructions": (
                "Specify the start time and end time of each day. Click on the day "
                "of week to enable or disable it. Specify the time window in minutes. "
                "Click on individual timeslots to make them unavailable (greyed out) "
                "for your participants."
            ),
            "defaultOptions": [
                {"day": day, "times": list(_WEEK_TIMES)}
                for day in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
            ],
            "allowCustomOptions": True,
            "uiHints": {"groupBy": "day", "displayFormat": "grid"},
        },
    },
    {
        "slug": "monthly_date",
        "name": "Monthly Date Selector",
        "description": "Select available dates in a month",
        "template_data": {
            "type": "monthly_date",
            "instructions": (
                "Click on each date to toggle it from green (ok) to yellow (less "
                "preferred) to red (no) to indicate which dates work for you."
            ),
            "adminInstructions": (
                "Select the dates you want participants to choose from. You can click "
                "individual dates or click and drag to select a range. Remove dates "
                "by clicking them again."
            ),
            "defaultOptions": [],
            "allowCustomOptions": True,
            "uiHints": {"displayFormat": "calendar", "allowDateRange": False},
        },
    },
    {
        "slug": "potluck",
        "name": "Potluck Contribution Selector",
        "description": "Coordinate who is contributing what, selected from categories you can configure.",
        "template_data": {
            "type": "potluck",
            "instructions": (
                "Click on each item to toggle it from green (willing to bring) to "
                "yellow (could bring if needed) to red (cannot bring) to indicate "
                "what you can contribute to the event."
            ),
            "adminInstructions": (
                "Add categories (like Main Dish, Dessert, Drinks) and then add "
                "specific items within each category. Participants will indicate "
                "what they can bring."
            ),
            "defaultOptions": [
                {"category": "Main Dish", "suggestions": ["Pasta", "Casserole", "BBQ"]},
                {"category": "Side Dish", "suggestions": ["Salad", "Vegetables", "Rice"]},
                {"category": "Dessert", "suggestions": ["Cake", "Cookies", "Fruit"]},
                {"category": "Drinks", "suggestions": ["Soda", "Juice", "Water"]},
            ],
            "allowCustomOptions": True,
            "uiHints": {"groupBy": "category", "displayFormat": "list"},
        },
    },
    {
        "slug": "simple_poll",
        "name": "Simple Poll",
        "description": "Quick poll to see who prefers what among a set of options.",
        "template_data": {
            "type": "simple_poll",
            "instructions": (
                "Click on each option to toggle it from green (yes) to yellow (maybe) "
                "to red (no) to indicate your preference."
            ),
            "adminInstructions": (
                "Add the options you want participants to vote on. Each option will "
                "be a separate choice in your poll."
            ),
            "defaultOptions": [],
            "allowCustomOptions": True,
            "uiHints": {"displayFormat": "list", "showResults": True},
        },
    },
]
