# --- DEFAULT TEMPLATE CATALOG ---
# Seeded on startup when the catalog is empty. Ids are fixed so assignments
# created against them stay valid across fresh installs.

DEFAULT_TEMPLATES = [
    {
        "id": 1001,
        "name": "Biceps Workout",
        "category": "Biceps",
        "exercises": [
            {"id": 2001, "exercise_name": "Dumbbell Bicep Curl", "sets": 3, "reps": 10, "suggested_weight": 0},
            {"id": 2002, "exercise_name": "Hammer Curl", "sets": 3, "reps": 12, "suggested_weight": 0},
        ]
    },
    {
        "id": 1002,
        "name": "Triceps Workout",
        "category": "Triceps",
        "exercises": [
            {"id": 2003, "exercise_name": "Tricep Cable Pushdown", "sets": 3, "reps": 12, "suggested_weight": 0},
            {"id": 2004, "exercise_name": "Overhead Dumbbell Extension", "sets": 3, "reps": 10, "suggested_weight": 0},
        ]
    },
    {
        "id": 1003,
        "name": "Back Workout",
        "category": "Back",
        "exercises": [
            {"id": 2005, "exercise_name": "Lat Pulldown", "sets": 3, "reps": 10, "suggested_weight": 0},
            {"id": 2006, "exercise_name": "Seated Cable Row", "sets": 3, "reps": 12, "suggested_weight": 0},
        ]
    },
    {
        "id": 1004,
        "name": "Leg Workout",
        "category": "Legs",
        "exercises": [
            {"id": 2007, "exercise_name": "Leg Press", "sets": 3, "reps": 10, "suggested_weight": 0},
            {"id": 2008, "exercise_name": "Goblet Squat", "sets": 3, "reps": 12, "suggested_weight": 0},
        ]
    },
]

# Fallback style for a logged workout whose template no longer resolves
DEFAULT_WORKOUT_STYLE = "Trainer Workout"
