from __future__ import annotations

from typing import Dict

DEFAULT_LANGUAGE = "pt"

LABELS: Dict[str, Dict[str, str]] = {
    "pt": {
        "in": "Entrada",
        "out": "Saída",
        "quick_adjust": "Ajuste Rápido",
        "manual_adjust": "Ajuste Manual",
        "initial_stock": "Stock Inicial",
        "insight_error_title": "Erro na Análise",
        "insight_error_description": "Não foi possível conectar ao serviço de IA no momento.",
        "insight_error_recommendation": "Tente novamente mais tarde.",
        "description_unavailable": "Descrição automática indisponível.",
    },
    "en": {
        "in": "Stock In",
        "out": "Stock Out",
        "quick_adjust": "Quick Adjustment",
        "manual_adjust": "Manual Adjustment",
        "initial_stock": "Initial Stock",
        "insight_error_title": "Analysis Error",
        "insight_error_description": "Could not reach the AI service right now.",
        "insight_error_recommendation": "Please try again later.",
        "description_unavailable": "Automatic description unavailable.",
    },
    "fr": {
        "in": "Entrée",
        "out": "Sortie",
        "quick_adjust": "Ajustement Rapide",
        "manual_adjust": "Ajustement Manuel",
        "initial_stock": "Stock Initial",
        "insight_error_title": "Erreur d'Analyse",
        "insight_error_description": "Impossible de joindre le service d'IA pour le moment.",
        "insight_error_recommendation": "Veuillez réessayer plus tard.",
        "description_unavailable": "Description automatique indisponible.",
    },
}


def label(language: str, key: str) -> str:
    """Obtiene un texto del paquete de idioma, con respaldo al idioma por defecto."""
    pack = LABELS.get(language) or LABELS[DEFAULT_LANGUAGE]
    return pack.get(key) or LABELS[DEFAULT_LANGUAGE][key]
