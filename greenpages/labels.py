"""Static label sets for the dashboard, keyed by language."""
import copy
import logging
from typing import Any, Dict

from greenpages.config import Config

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"

LABELS: Dict[str, Dict[str, Any]] = {
    "en": {
        "dashboard_title": "Green Pages Book Dashboard",
        "dashboard_intro_title": "Welcome to Green Pages Book Dashboard!",
        "dashboard_intro": (
            "Explore real data about the books, publishers and authors from online website "
            "GoodReads. This data was last updated December 8th, 2020."
        ),
        "dashboard_sections": [
            {
                "title": "All Book Titles",
                "description": "displays a list of all the book titles that can be found on GoodReads.",
            },
            {
                "title": "Books by Publication Year",
                "description": "presents a line chart depicting the number of books published throughout the years.",
            },
            {
                "title": "Top Authors by Number of Books",
                "description": "presents a bar chart showing the number of books published by the top ten most published authors.",
            },
            {
                "title": "Top Publishers",
                "description": "presents a doughnut chart depicting the number of books published by the top ten most published publishers.",
            },
        ],
        "year_chart_title": "Books by Publication Year",
        "all_years": "All Years",
        "before1990": "Before 1990",
        "after1986": "After 1986",
        "book_titles": "All Book Titles",
        "top_authors": "Top Authors by Number of Books",
        "top_publishers": "Top Publishers",
        "top_rated": "Top Rated Books",
        "all_books": "All Books",
        "language_toggle": "Français",
    },
    "fr": {
        "dashboard_title": "Tableau de Bord pour des livres Green Pages",
        "dashboard_intro_title": "Bienvenue sur le Tableau de Bord des Livres Green Pages!",
        "dashboard_intro": (
            "Explorez des données réelles sur les livres, éditeurs et auteurs du site GoodReads. "
            "Ces données ont été mises à jour pour la dernière fois le 8 décembre 2020."
        ),
        "dashboard_sections": [
            {
                "title": "Tous les Titres de Livres",
                "description": "affiche une liste de tous les titres de livres que l'on peut trouver sur GoodReads.",
            },
            {
                "title": "Livres par Année de Publication",
                "description": "présente un graphique linéaire décrivant le nombre de livres publiés au fil des ans.",
            },
            {
                "title": "Auteurs les Plus Prolifiques",
                "description": "présente un graphique à barres montrant le nombre de livres publiés par les dix auteurs les plus prolifiques.",
            },
            {
                "title": "Meilleurs Éditeurs",
                "description": "présente un graphique en doughnut décrivant le nombre de livres publiés par les dix éditeurs les plus prolifiques.",
            },
        ],
        "year_chart_title": "Livres par Année de Publication",
        "all_years": "Toutes les Années",
        "before1990": "Avant 1990",
        "after1986": "Après 1986",
        "book_titles": "Tous les Titres de Livres",
        "top_authors": "Auteurs les Plus Prolifiques",
        "top_publishers": "Meilleurs Éditeurs",
        "top_rated": "Livres les Mieux Notés",
        "all_books": "Tous les Livres",
        "language_toggle": "English",
    },
}


def get_labels(language: str) -> Dict[str, Any]:
    """
    Return a copy of the label set for a language.

    Unknown languages fall back to the configured default, then to English.
    """
    if language not in LABELS:
        fallback = Config.DEFAULT_LANGUAGE if Config.DEFAULT_LANGUAGE in LABELS else FALLBACK_LANGUAGE
        logger.warning(f"No labels for language {language!r}, using {fallback!r}")
        language = fallback
    return copy.deepcopy(LABELS[language])
