"""Sample advocates inserted by the seed endpoint and ``init_db.py --seed``.

Phone numbers are part of the natural key, so keep them distinct.
"""

SPECIALTIES = [
    "Bipolar",
    "LGBTQ",
    "Medication/Prescribing",
    "Suicide History/Attempts",
    "General Mental Health (anxiety, depression, stress, grief, life transitions)",
    "Men's issues",
    "Relationship Issues (family, friends, couple, etc)",
    "Trauma & PTSD",
    "Personality disorders",
    "Personal growth",
    "Substance use/abuse",
    "Pediatrics",
    "Women's issues (post-partum, infertility, family planning)",
    "Chronic pain",
    "Weight loss & nutrition",
    "Eating disorders",
    "Diabetic Diet and nutrition",
    "Coaching (leadership, career, academic and wellness)",
    "Life coaching",
    "Obsessive-compulsive disorders",
    "Neuropsychological evaluations & testing (ADHD testing)",
    "Attention and Hyperactivity (ADHD)",
    "Sleep issues",
    "Schizophrenia and psychotic disorders",
    "Learning disorders",
    "Domestic abuse",
]


def _pick(*indexes: int) -> list[str]:
    return [SPECIALTIES[i] for i in indexes]


ADVOCATE_SEED = [
    {
        "first_name": "John",
        "last_name": "Doe",
        "city": "New York",
        "degree": "MD",
        "specialties": _pick(21, 14),
        "years_of_experience": 10,
        "phone_number": 5551234567,
    },
    {
        "first_name": "Jane",
        "last_name": "Smith",
        "city": "Los Angeles",
        "degree": "PhD",
        "specialties": _pick(4, 7, 0),
        "years_of_experience": 8,
        "phone_number": 5559876543,
    },
    {
        "first_name": "Alice",
        "last_name": "Johnson",
        "city": "Chicago",
        "degree": "MSW",
        "specialties": _pick(6, 15, 22),
        "years_of_experience": 5,
        "phone_number": 5554567890,
    },
    {
        "first_name": "Michael",
        "last_name": "Brown",
        "city": "Houston",
        "degree": "MD",
        "specialties": _pick(2, 3, 23),
        "years_of_experience": 12,
        "phone_number": 5556543210,
    },
    {
        "first_name": "Emily",
        "last_name": "Davis",
        "city": "Phoenix",
        "degree": "PhD",
        "specialties": _pick(12, 11),
        "years_of_experience": 7,
        "phone_number": 5553210987,
    },
    {
        "first_name": "Chris",
        "last_name": "Martinez",
        "city": "Philadelphia",
        "degree": "MSW",
        "specialties": _pick(10, 5, 25),
        "years_of_experience": 9,
        "phone_number": 5557890123,
    },
    {
        "first_name": "Jessica",
        "last_name": "Taylor",
        "city": "San Antonio",
        "degree": "MD",
        "specialties": _pick(13, 16),
        "years_of_experience": 11,
        "phone_number": 5554561234,
    },
    {
        "first_name": "David",
        "last_name": "Harris",
        "city": "San Diego",
        "degree": "PhD",
        "specialties": _pick(17, 18, 9),
        "years_of_experience": 6,
        "phone_number": 5557896543,
    },
    {
        "first_name": "Laura",
        "last_name": "Clark",
        "city": "Dallas",
        "degree": "MSW",
        "specialties": _pick(1, 8),
        "years_of_experience": 4,
        "phone_number": 5550123456,
    },
    {
        "first_name": "Daniel",
        "last_name": "Lewis",
        "city": "San Jose",
        "degree": "MD",
        "specialties": _pick(20, 21, 24),
        "years_of_experience": 13,
        "phone_number": 5553217654,
    },
    {
        "first_name": "Sarah",
        "last_name": "Lee",
        "city": "Austin",
        "degree": "PhD",
        "specialties": _pick(19, 4),
        "years_of_experience": 10,
        "phone_number": 5551238765,
    },
    {
        "first_name": "James",
        "last_name": "King",
        "city": "Jacksonville",
        "degree": "MSW",
        "specialties": _pick(7, 25, 3),
        "years_of_experience": 5,
        "phone_number": 5556540987,
    },
    {
        "first_name": "Megan",
        "last_name": "Green",
        "city": "San Francisco",
        "degree": "MD",
        "specialties": _pick(14, 15),
        "years_of_experience": 14,
        "phone_number": 5559873456,
    },
    {
        "first_name": "Joshua",
        "last_name": "Walker",
        "city": "Columbus",
        "degree": "PhD",
        "specialties": _pick(22, 0, 2),
        "years_of_experience": 9,
        "phone_number": 5556781234,
    },
    {
        "first_name": "Amanda",
        "last_name": "Hall",
        "city": "Fort Worth",
        "degree": "MSW",
        "specialties": _pick(11, 24),
        "years_of_experience": 3,
        "phone_number": 5559872345,
    },
]
