"""
Default catalog contents loaded by ``manage.py seed_catalog``.
"""

BUDGETS = [
    'Below $10,000',
    '$10,000 - $50,000',
    '$50,000 - $100,000',
    'Above $100,000',
]

DELIVERY_TIMES = [
    'Within 1 month',
    '1-3 months from start',
    '3-6 months from start',
    'Specific date',
    'Other',
]

PROJECT_TYPES = [
    'Smart Contract',
    'Frontend',
    'MVP',
    'Audit',
    'Mobile App',
]

PROFICIENCIES = [
    'Junior',
    'Mid-Level',
    'Senior',
]

ROLES = [
    'Front End',
    'BackEnd',
    'Full Stack',
    'UX Designer',
]

SKILLS = [
    'Rust',
    'Javascript',
    'HTML5',
    'Node',
    'UX',
]

# ISO 639-2 code -> English name
LANGUAGES = {
    'ARA': 'Arabic',
    'CAT': 'Catalan',
    'CHI': 'Chinese',
    'DEU': 'German',
    'ENG': 'English',
    'FRA': 'French',
    'HIN': 'Hindi',
    'ITA': 'Italian',
    'JPN': 'Japanese',
    'KOR': 'Korean',
    'NLD': 'Dutch',
    'POL': 'Polish',
    'POR': 'Portuguese',
    'RUS': 'Russian',
    'SPA': 'Spanish',
    'TUR': 'Turkish',
    'UKR': 'Ukrainian',
}
