"""
Indian state and union territory codes

Carrier addresses take full state names; checkout may hand over the
two-letter code instead.
"""

STATE_CODES = {
    "AN": "Andaman and Nicobar Islands",
    "AP": "Andhra Pradesh",
    "AR": "Arunachal Pradesh",
    "AS": "Assam",
    "BR": "Bihar",
    "CH": "Chandigarh",
    "CT": "Chhattisgarh",
    "DN": "Dadra and Nagar Haveli and Daman and Diu",
    "DL": "Delhi",
    "GA": "Goa",
    "GJ": "Gujarat",
    "HR": "Haryana",
    "HP": "Himachal Pradesh",
    "JK": "Jammu and Kashmir",
    "JH": "Jharkhand",
    "KA": "Karnataka",
    "KL": "Kerala",
    "LA": "Ladakh",
    "LD": "Lakshadweep",
    "MP": "Madhya Pradesh",
    "MH": "Maharashtra",
    "MN": "Manipur",
    "ML": "Meghalaya",
    "MZ": "Mizoram",
    "NL": "Nagaland",
    "OR": "Odisha",
    "PY": "Puducherry",
    "PB": "Punjab",
    "RJ": "Rajasthan",
    "SK": "Sikkim",
    "TN": "Tamil Nadu",
    "TG": "Telangana",
    "TR": "Tripura",
    "UP": "Uttar Pradesh",
    "UT": "Uttarakhand",
    "WB": "West Bengal",
}

# Current ISO 3166-2:IN codes and common alternatives for entries above
STATE_CODE_ALIASES = {
    "CG": "Chhattisgarh",
    "OD": "Odisha",
    "UK": "Uttarakhand",
    "TS": "Telangana",
}

_LOOKUP = {**STATE_CODES, **STATE_CODE_ALIASES}


def normalize_state(state: str) -> str:
    """
    Expand a two-letter state code to its full name.

    Anything else, including unknown codes, is returned unchanged.
    """
    if state is None:
        return state
    candidate = state.strip()
    if len(candidate) == 2:
        return _LOOKUP.get(candidate.upper(), state)
    return state
