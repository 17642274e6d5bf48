"""NFL bye weeks by team abbreviation."""

BYE_WEEKS: dict[str, int] = {
    "ARI": 11, "ATL": 12, "BAL": 14, "BUF": 12,
    "CAR": 11, "CHI": 7, "CIN": 12, "CLE": 10,
    "DAL": 7, "DEN": 14, "DET": 9, "GB": 10,
    "HOU": 14, "IND": 14, "JAX": 12, "KC": 6,
    "LAC": 5, "LAR": 6, "LV": 10, "MIA": 6,
    "MIN": 6, "NE": 14, "NO": 12, "NYG": 11,
    "NYJ": 12, "PHI": 7, "PIT": 9, "SEA": 10,
    "SF": 9, "TB": 11, "TEN": 5, "WAS": 14,
}

DEFAULT_BYE_WEEK = 8


def bye_week_for(team: str) -> int:
    return BYE_WEEKS.get(team, DEFAULT_BYE_WEEK)
