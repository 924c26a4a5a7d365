# services/profile_engine/score_maps.py
# Categorical answer token -> 1-5 scale value, one table per question family.

import logging
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

SCALE_MIDPOINT = 3.0

# --- Religiosity (CRS-5) ---
# Shared by the frequency-style and intensity-style CRS items.
CRS_SCORE_MAP = {
    # Frequency
    "jamais": 1,
    "rarement": 2,
    "occasionnellement": 3,
    "souvent": 4,
    "tres_souvent": 5,
    # Intensity
    "pas_du_tout": 1,
    "peu": 2,
    "moderement": 3,
    "beaucoup": 4,
    "totalement": 5,
    # Public practice
    "quelques_fois_an": 2,
    "mensuel": 3,
    "hebdo": 4,
    "pluri_hebdo": 5,
    # Private practice
    "quotidien": 4,
    "pluri_quotidien": 5,
}

# --- AI usage ---
AI_FREQUENCY_SCORES = {
    "jamais": 1,
    "essaye": 2,
    "occasionnel": 3,
    "regulier": 4,
    "quotidien": 5,
}

DIGITAL_ATTITUDE_SCORES = {
    "tres_positif": 5,
    "positif": 4,
    "neutre": 3,
    "negatif": 2,
    "tres_negatif": 1,
}

# Clergy: AI use when preparing preaching
MINISTRY_USAGE_SCORES = {
    "jamais": 1,
    "rare": 2,
    "regulier": 4,
    "systematique": 5,
}

# Clergy: AI-drafted pastoral care emails
CARE_EMAIL_SCORES = {
    "non_jamais": 1,
    "oui_brouillon": 3.5,
    "oui_souvent": 5,
}

# Lay: AI-generated prayer
LAIC_PRIERE_SCORES = {
    "non": 1,
    "oui_positif": 5,
    "oui_neutre": 3.5,
    "oui_negatif": 2.5,
}

# Lay: AI for spiritual counsel
LAIC_CONSEIL_SCORES = {
    "jamais": 1,
    "complement": 3,
    "oui_possible": 4,
    "deja_fait": 5,
    "ne_sait_pas": 2.5,
}

# Delegation weight per sermon-preparation task in the min_pred_nature matrix.
# Writing the actual words carries the most theological weight.
SERMON_TASK_WEIGHTS = {
    "plan": 1,
    "exegese": 2,
    "illustration": 1,
    "images": 1,
    "redaction": 3,
}
MAX_DELEGATION_LEVEL = 3

# --- Sacred boundary ---
INSPIRATION_BOUNDARY_SCORES = {
    "impossible": 5,
    "peu_probable": 4,
    "possible_indirect": 3,
    "possible": 1.5,
    "ne_sait_pas": 3,
}

HUMAN_MEDIATION_SCORES = {
    "oui_absolument": 5,
    "oui_pour_essentiel": 4,
    "partiellement": 3,
    "non_pas_necessairement": 1.5,
    "ne_sait_pas": 3,
}

# --- Ethical concern ---
FUTURE_RISK_SCORES = {
    "paresse": 4,
    "deshumanisation": 4.5,
    "heresie": 4.5,
    "autre": 3.5,
    "aucune": 1,
    "ne_sait_pas": 2.5,
}

# Inverted: a negative view of AI's usefulness signals concern
PERCEIVED_UTILITY_CONCERN_SCORES = {
    "tres_negatif": 5,
    "negatif": 4,
    "neutre": 3,
    "positif": 2,
    "tres_positif": 1,
    "ne_sait_pas": 3,
}

REPLACEMENT_ANXIETY_CONCERN_SCORES = {
    "non_impossible": 1.5,
    "non_peu_probable": 2,
    "possible_partiel": 3.5,
    "oui_probable": 4.5,
    "oui_certain": 5,
    "ne_sait_pas": 3,
}

# AIAS sociotechnical blindness proxy
OPACITY_CONCERN_SCORES = {
    "non_confiance": 1,
    "non_indifferent": 1.5,
    "peu": 2.5,
    "oui_moderement": 4,
    "oui_fortement": 5,
}

IMAGO_DEI_CONCERN_SCORES = {
    "pas_du_tout": 1,
    "peu": 2,
    "moderement": 3,
    "beaucoup": 4,
    "totalement": 5,
    "ne_sait_pas": 2.5,
}

# --- Psychological perception (partial Godspeed) ---
GODSPEED_NATURE_SCORES = {
    "1_machine": 1,
    "2_machine_plus": 2,
    "3_neutre": 3,
    "4_humain_moins": 4,
    "5_humain": 5,
}

GODSPEED_CONSCIENCE_SCORES = {
    "impossible": 1,
    "imitation": 2,
    "incertain": 3,
    "possible_emergence": 4,
    "probable": 5,
}

IMAGO_DEI_PERCEPTION_SCORES = {
    "pas_du_tout": 1,
    "peu": 2,
    "moderement": 3,
    "beaucoup": 4,
    "totalement": 5,
    "ne_sait_pas": 3,
}

REPLACEMENT_ANXIETY_PERCEPTION_SCORES = {
    "non_impossible": 1,
    "non_peu_probable": 2,
    "possible_partiel": 3,
    "oui_probable": 4,
    "oui_certain": 5,
    "ne_sait_pas": 3,
}

INSPIRATION_PERCEPTION_SCORES = {
    "impossible": 1,
    "peu_probable": 2,
    "possible_indirect": 3.5,
    "possible": 4.5,
    "ne_sait_pas": 3,
}

# --- Community influence ---
# Knowing the official position at all, whatever it is, signals engagement.
OFFICIAL_POSITION_SCORES = {
    "oui_favorable": 4,
    "oui_prudent": 4,
    "oui_defavorable": 4,
    "non": 2,
    "ne_sait_pas": 2,
}

COMMUNITY_DISCUSSION_SCORES = {
    "jamais": 1,
    "rarement": 2,
    "parfois": 3,
    "souvent": 4,
    "organise": 5,
}

PEER_PERCEPTION_SCORES = {
    "tres_favorable": 4,
    "favorable": 3.5,
    "neutre": 3,
    "mefiant": 3.5,
    "hostile": 4,
    "ne_sait_pas": 1.5,
}

COMMUNITY_SIZE_SCORES = {
    "tres_petite": 2.5,
    "petite": 3,
    "moyenne": 3.5,
    "grande": 4,
    "tres_grande": 4,
    "ne_sait_pas": 2.5,
}

# --- Future orientation ---
USAGE_INTENTION_SCORES = {
    "oui_certain": 5,
    "oui_probable": 4,
    "peut_etre": 3,
    "non_probable": 2,
    "non_certain": 1,
    "ne_sait_pas": 2.5,
}

TRAINING_WISH_SCORES = {
    "oui_tres": 5,
    "oui_assez": 4,
    "peut_etre": 3,
    "non_pas_vraiment": 2,
    "non_pas_du_tout": 1,
}

# Current usage read as a trajectory
FREQUENCY_TRAJECTORY_SCORES = {
    "jamais": 2,
    "essaye": 3,
    "occasionnel": 3.5,
    "regulier": 4,
    "quotidien": 4.5,
}

AGE_ORIENTATION_SCORES = {
    "18-35": 3.8,
    "36-50": 3.5,
    "51-65": 3,
    "66+": 2.5,
}

DIGITAL_ATTITUDE_TRAJECTORY_SCORES = {
    "tres_positif": 4.5,
    "positif": 4,
    "neutre": 3,
    "negatif": 2,
    "tres_negatif": 1,
}


def lookup_score(score_map: Mapping[str, float], token: str) -> Optional[float]:
    """
    Translates an answer token through a score map.

    Returns None for an empty token (question not answered). A token the map
    does not know is schema drift in the survey definition: it scores the
    scale midpoint instead of failing the whole scoring run.
    """
    if not token:
        return None
    score = score_map.get(token)
    if score is None:
        logger.debug("Unrecognized answer token, scoring midpoint", extra={"token": token})
        return SCALE_MIDPOINT
    return float(score)
