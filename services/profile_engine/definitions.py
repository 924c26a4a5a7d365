# services/profile_engine/definitions.py
# Static rule tables for the narrative parts of a profile spectrum.
#
# Conditions receive the dimension value map ({dimension: value}) and, where
# relevant, the respondent role. Texts are shown to respondents as-is.

from typing import Callable, Dict, List, NamedTuple, Tuple

from .models import RespondentRole

Values = Dict[str, float]


# --- Advanced insights ---
# Priority 1-10, higher first. Rules on the same dimension are mutually exclusive.
INSIGHT_RULES: List[Dict] = [
    {
        "id": "faith_central",
        "when": lambda d, role: d["religiosity"] >= 4.5,
        "category": "spiritual",
        "icon": "🙏",
        "title": "Foi vivante et centrale",
        "message": "Votre pratique religieuse est exceptionnellement riche. Cette profondeur spirituelle est un ancrage précieux pour discerner l'usage de l'IA.",
        "priority": 5,
    },
    {
        "id": "faith_evolving",
        "when": lambda d, role: d["religiosity"] <= 2,
        "category": "spiritual",
        "icon": "🌱",
        "title": "Chemin spirituel en évolution",
        "message": "Votre foi est en phase d'exploration. L'IA pourrait être un compagnon de recherche, mais les rencontres humaines restent irremplaçables.",
        "priority": 4,
    },
    {
        "id": "tech_pioneer",
        "when": lambda d, role: d["ai_openness"] >= 4.5,
        "category": "technological",
        "icon": "⚡",
        "title": "Pionnier technologique",
        "message": "Vous faites partie des 15% les plus ouverts à l'IA. Votre expérience peut éclairer d'autres croyants plus hésitants.",
        "priority": 4,
    },
    {
        "id": "tech_caution",
        "when": lambda d, role: d["ai_openness"] <= 1.8,
        "category": "technological",
        "icon": "🛡️",
        "title": "Prudence technologique assumée",
        "message": "Votre réserve face à l'IA témoigne d'une sagesse face aux modes. Cette prudence peut protéger l'essentiel.",
        "priority": 3,
    },
    {
        "id": "sacred_guardian",
        "when": lambda d, role: d["sacred_boundary"] >= 4.5,
        "category": "spiritual",
        "icon": "⛪",
        "title": "Gardien du sacré",
        "message": "Vous maintenez une frontière claire entre le profane et le sacré. Cette distinction est théologiquement significative.",
        "priority": 4,
    },
    {
        "id": "fluid_spirituality",
        "when": lambda d, role: d["sacred_boundary"] <= 1.5 and d["ai_openness"] >= 3.5,
        "category": "spiritual",
        "icon": "🌊",
        "title": "Spiritualité fluide",
        "message": "Vous voyez l'IA comme potentiellement présente dans tous les aspects de la vie, y compris spirituels. Une approche audacieuse qui mérite discernement.",
        "priority": 3,
    },
    {
        "id": "ethical_acuity",
        "when": lambda d, role: d["ethical_concern"] >= 4.5,
        "category": "ethical",
        "icon": "⚖️",
        "title": "Conscience éthique aiguë",
        "message": "Vos préoccupations éthiques sont profondes. Ce sens critique est précieux dans un monde qui adopte souvent les technologies sans recul.",
        "priority": 4,
    },
    {
        "id": "anthropological_questioning",
        "when": lambda d, role: d["psychological_perception"] >= 4.5,
        "category": "developmental",
        "icon": "🤔",
        "title": "Questionnement anthropologique",
        "message": "Vous vous interrogez profondément sur la nature de l'IA et son rapport à l'humain. Ces questions théologiques méritent d'être approfondies.",
        "priority": 3,
    },
    {
        "id": "community_anchor",
        "when": lambda d, role: d["community_influence"] >= 4.5,
        "category": "relational",
        "icon": "👥",
        "title": "Ancrage communautaire fort",
        "message": "Votre communauté joue un rôle important dans votre réflexion. Ce lien peut être une force pour un discernement collectif.",
        "priority": 3,
    },
    {
        "id": "future_facing",
        "when": lambda d, role: d["future_orientation"] >= 4.5,
        "category": "developmental",
        "icon": "🚀",
        "title": "Tournée vers l'avenir",
        "message": "Vous êtes très ouvert à faire évoluer votre rapport à l'IA. Cette disposition à apprendre est un atout pour s'adapter aux changements.",
        "priority": 3,
    },
    {
        "id": "steady_course",
        "when": lambda d, role: d["future_orientation"] <= 1.5,
        "category": "developmental",
        "icon": "⚓",
        "title": "Stabilité assumée",
        "message": "Vous n'envisagez pas de changer significativement votre approche. Cette constance peut être sagesse ou résistance au changement.",
        "priority": 2,
    },
    {
        "id": "connected_minister",
        "when": lambda d, role: role is RespondentRole.CLERGY and d["ai_openness"] >= 3.5,
        "category": "relational",
        "icon": "📖",
        "title": "Ministère connecté",
        "message": "Votre ouverture à l'IA dans le ministère peut inspirer vos fidèles. Expliquer vos usages aide à préserver la confiance.",
        "priority": 3,
    },
    {
        "id": "community_relay",
        "when": lambda d, role: role is RespondentRole.LAYPERSON and d["community_influence"] >= 4,
        "category": "relational",
        "icon": "🤲",
        "title": "Relais communautaire",
        "message": "Votre implication dans la communauté fait de vous un interlocuteur naturel sur ces questions. Partagez votre réflexion avec vos responsables.",
        "priority": 2,
    },
]


# --- Tension points ---
TENSION_RULES: List[Dict] = [
    {
        "dimension1": "ai_openness",
        "dimension2": "sacred_boundary",
        "when": lambda d: d["ai_openness"] >= 3.5 and d["sacred_boundary"] >= 4,
        "description": "Vous êtes ouvert à l'IA en général mais maintenez une réserve pour le spirituel.",
        "suggestion": "Clarifiez ce qui distingue un usage spirituel d'un usage pratique de l'IA.",
    },
    {
        "dimension1": "ethical_concern",
        "dimension2": "future_orientation",
        "when": lambda d: d["ethical_concern"] >= 4 and d["future_orientation"] >= 4,
        "description": "Vous voulez avancer mais avec prudence éthique.",
        "suggestion": "Cette tension est créative : elle peut vous conduire à une adoption responsable.",
    },
    {
        "dimension1": "community_influence",
        "dimension2": "religiosity",
        "when": lambda d: d["community_influence"] <= 2 and d["religiosity"] >= 4,
        "description": "Foi profonde mais peu influencée par la communauté.",
        "suggestion": "Enrichissez votre réflexion par le dialogue avec d'autres croyants.",
    },
    {
        "dimension1": "psychological_perception",
        "dimension2": "ethical_concern",
        "when": lambda d: d["psychological_perception"] >= 4 and d["ethical_concern"] <= 2,
        "description": "Vous réfléchissez à la nature de l'IA mais sans inquiétude particulière.",
        "suggestion": "Votre approche philosophique pourrait gagner à considérer les implications pratiques.",
    },
]


# --- Growth areas ---
GROWTH_AREA_RULES: List[Dict] = [
    {
        "when": lambda d: d["ai_openness"] <= 2.5 and d["future_orientation"] >= 3,
        "area": "Exploration technologique",
        "current_state": "Réserve face à l'IA",
        "potential_growth": "Découvrir des usages qui correspondent à vos valeurs",
        "actionable_step": "Essayez un outil d'IA simple dans un contexte non spirituel pour vous familiariser",
        "priority": 4,
    },
    {
        "when": lambda d: d["community_influence"] <= 2 and d["religiosity"] >= 3,
        "area": "Dialogue communautaire",
        "current_state": "Réflexion plutôt individuelle",
        "potential_growth": "Enrichir votre perspective par l'échange",
        "actionable_step": "Initiez une conversation sur l'IA avec un membre de votre communauté",
        "priority": 3,
    },
    {
        "when": lambda d: d["ethical_concern"] <= 2 and d["ai_openness"] >= 4,
        "area": "Réflexion éthique",
        "current_state": "Adoption sans réserves particulières",
        "potential_growth": "Développer un regard critique constructif",
        "actionable_step": "Lisez un article sur les enjeux éthiques de l'IA dans un domaine qui vous concerne",
        "priority": 5,
    },
    {
        "when": lambda d: d["sacred_boundary"] >= 4.5 and d["future_orientation"] >= 3,
        "area": "Expérimentation encadrée",
        "current_state": "Frontière sacrée très marquée",
        "potential_growth": "Tester prudemment certains usages sans compromettre l'essentiel",
        "actionable_step": "Identifiez un usage administratif où l'IA pourrait vous libérer du temps pour le relationnel",
        "priority": 3,
    },
    {
        "when": lambda d: d["future_orientation"] <= 2,
        "area": "Ouverture au changement",
        "current_state": "Satisfaction avec l'approche actuelle",
        "potential_growth": "Rester informé des évolutions sans nécessairement les adopter",
        "actionable_step": "Suivez occasionnellement l'actualité de l'IA dans le domaine religieux",
        "priority": 2,
    },
]


# --- Interpretation ---
UNIQUE_ASPECT_RULES: List[Tuple[Callable[[Values], bool], str]] = [
    (lambda d: d["religiosity"] >= 4 and d["ai_openness"] >= 4,
     "Rare combinaison de foi intense et d'enthousiasme technologique"),
    (lambda d: d["ethical_concern"] >= 4 and d["ai_openness"] >= 3.5,
     "Capacité à adopter l'IA tout en maintenant une vigilance éthique"),
    (lambda d: d["sacred_boundary"] >= 4 and d["future_orientation"] >= 3.5,
     "Protection du sacré combinée à une ouverture au progrès"),
    (lambda d: d["community_influence"] <= 2.5 and d["religiosity"] >= 3.5,
     "Foi personnelle développée indépendamment des influences communautaires"),
]
UNIQUE_ASPECT_FALLBACK = "Profil équilibré reflétant une approche réfléchie"

BLIND_SPOT_RULES: List[Tuple[Callable[[Values], bool], str]] = [
    (lambda d: d["ai_openness"] <= 2,
     "Risque de passer à côté d'outils réellement utiles par excès de prudence"),
    (lambda d: d["ai_openness"] >= 4.5 and d["ethical_concern"] <= 2,
     "Enthousiasme qui pourrait manquer de recul critique"),
    (lambda d: d["community_influence"] >= 4.5,
     "Possible difficulté à développer une position personnelle indépendante"),
    (lambda d: d["sacred_boundary"] <= 1.5,
     "Frontière poreuse qui pourrait diluer la spécificité du spirituel"),
]
BLIND_SPOT_FALLBACK = "Aucun angle mort majeur identifié"

SUB_PROFILE_NARRATIVE_THRESHOLD = 60


# --- Sub-profile qualifying criteria ---

class BonusContext(NamedTuple):
    values: Values
    is_clergy: bool
    interests: Tuple[str, ...]
    future_risk: str
    training_wish: str


# Each rule adds its points when it holds; one bonus point is worth 5 match points.
SUB_PROFILE_BONUS_RULES: Dict[str, List[Tuple[Callable[[BonusContext], bool], float]]] = {
    "protecteur_sacre": [
        (lambda c: c.values["sacred_boundary"] >= 4.5, 1.0),
    ],
    "sage_prudent": [
        (lambda c: 2 <= c.values["future_orientation"] <= 3.5, 0.5),
        (lambda c: c.training_wish == "peut_etre", 0.5),
    ],
    "berger_communautaire": [
        (lambda c: c.is_clergy, 1.0),
        (lambda c: c.values["community_influence"] >= 4, 0.5),
    ],
    "analyste_spirituel": [
        (lambda c: c.training_wish in ("oui_tres", "oui_assez"), 1.0),
    ],
    "discerneur_pastoral": [
        (lambda c: c.is_clergy, 0.8),
        (lambda c: c.future_risk == "deshumanisation", 0.5),
    ],
    "pont_generationnel": [
        (lambda c: c.values["community_influence"] >= 3.5, 0.5),
    ],
    "evangeliste_digital": [
        (lambda c: "communication" in c.interests, 1.0),
        (lambda c: "catechese" in c.interests, 0.5),
    ],
    "theologien_techno": [
        (lambda c: c.values["psychological_perception"] >= 3.5, 0.5),
    ],
    "efficace_engage": [
        (lambda c: "administration" in c.interests, 1.0),
    ],
    "communicateur_digital": [
        (lambda c: "communication" in c.interests or "reseaux_sociaux" in c.interests, 1.0),
    ],
    "optimisateur_pastoral": [
        (lambda c: c.is_clergy and "accompagnement" in c.interests, 1.0),
    ],
    "visionnaire": [
        (lambda c: c.values["future_orientation"] >= 4.5, 1.0),
    ],
    "experimentateur": [
        (lambda c: len(c.interests) >= 4, 0.5),
    ],
    "ethicien": [
        (lambda c: c.future_risk in ("deshumanisation", "heresie"), 1.0),
    ],
    "reformateur_social": [
        (lambda c: c.future_risk == "deshumanisation", 0.5),
    ],
    "novice_technologique": [
        (lambda c: c.values["religiosity"] >= 4 and c.values["ai_openness"] <= 2.5, 1.0),
    ],
    "chercheur_seculier": [
        (lambda c: c.values["religiosity"] <= 2.5 and c.values["ai_openness"] >= 3, 1.0),
    ],
}
SUB_PROFILE_BONUS_POINTS = 5
