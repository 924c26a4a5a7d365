# services/profile_engine/simulation.py
# Persona-driven survey simulation, used to check that archetypal answer
# patterns land on the profiles they were designed for.

import logging
import random
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

import pandas as pd

from .answers import clergy_uses_ai, is_clergy, is_layperson
from .bias import MC_TARGETS
from .models import DIMENSION_NAMES
from .profiles import calculate_profile_spectrum
from .score_maps import SERMON_TASK_WEIGHTS

logger = logging.getLogger(__name__)

Answers = Dict[str, Any]
Generator = Callable[[random.Random, Answers], Any]


class Question(NamedTuple):
    id: str
    kind: str  # choice, multiple, scale or matrix
    options: Tuple[str, ...] = ()
    condition: Optional[Callable[[Answers], bool]] = None


def _uses_ai(answers: Answers) -> bool:
    frequency = answers.get("ctrl_ia_frequence")
    return bool(frequency) and frequency != "jamais"


# Scored questions in survey order; options ordered from low to high where
# the question has a natural direction.
SURVEY_QUESTIONS: List[Question] = [
    Question("profil_statut", "choice", ("clerge", "religieux", "laic_engagé", "laic_pratiquant", "curieux")),
    Question("profil_age", "choice", ("18-35", "36-50", "51-65", "66+")),
    Question("profil_taille_communaute", "choice", ("tres_petite", "petite", "moyenne", "grande", "tres_grande", "ne_sait_pas")),
    Question("crs_intellect", "choice", ("jamais", "rarement", "occasionnellement", "souvent", "tres_souvent")),
    Question("crs_ideology", "choice", ("pas_du_tout", "peu", "moderement", "beaucoup", "totalement")),
    Question("crs_public_practice", "choice", ("jamais", "quelques_fois_an", "mensuel", "hebdo", "pluri_hebdo")),
    Question("crs_private_practice", "choice", ("jamais", "rarement", "occasionnellement", "quotidien", "pluri_quotidien")),
    Question("crs_experience", "choice", ("jamais", "rarement", "occasionnellement", "souvent", "tres_souvent")),
    Question("theo_orientation", "choice", ("traditionaliste", "modere", "progressiste", "ne_sait_pas")),
    Question("ctrl_ia_frequence", "choice", ("jamais", "essaye", "occasionnel", "regulier", "quotidien")),
    Question("ctrl_ia_contextes", "multiple",
             ("travail_pro", "recherche_info", "creation", "programmation", "loisirs", "spirituel"), _uses_ai),
    Question("ctrl_ia_confort", "scale"),
    Question("digital_attitude_generale", "choice", ("tres_negatif", "negatif", "neutre", "positif", "tres_positif")),
    Question("min_pred_usage", "choice", ("jamais", "rare", "regulier", "systematique"), is_clergy),
    Question("min_pred_nature", "matrix", tuple(SERMON_TASK_WEIGHTS), clergy_uses_ai),
    Question("min_pred_sentiment", "scale", (), clergy_uses_ai),
    Question("min_care_email", "choice", ("non_jamais", "oui_brouillon", "oui_souvent"), is_clergy),
    Question("min_admin_burden", "scale", (), is_clergy),
    Question("laic_substitution_priere", "choice", ("non", "oui_negatif", "oui_neutre", "oui_positif"), is_layperson),
    Question("laic_conseil_spirituel", "choice", ("jamais", "complement", "oui_possible", "deja_fait", "ne_sait_pas"), is_layperson),
    Question("psych_godspeed_nature", "choice", ("1_machine", "2_machine_plus", "3_neutre", "4_humain_moins", "5_humain")),
    Question("psych_godspeed_conscience", "choice", ("impossible", "imitation", "incertain", "possible_emergence", "probable")),
    Question("psych_imago_dei", "choice", ("pas_du_tout", "peu", "moderement", "beaucoup", "totalement", "ne_sait_pas")),
    Question("psych_anxiete_remplacement", "choice",
             ("non_impossible", "non_peu_probable", "possible_partiel", "oui_probable", "oui_certain", "ne_sait_pas")),
    Question("psych_aias_opacity", "choice", ("non_confiance", "non_indifferent", "peu", "oui_moderement", "oui_fortement")),
    Question("theo_inspiration", "choice", ("impossible", "peu_probable", "possible_indirect", "possible", "ne_sait_pas")),
    Question("theo_liturgie_ia", "scale"),
    Question("theo_activites_sacrees", "multiple",
             ("sacrements", "predication", "priere_personnelle", "accompagnement", "discernement", "aucune")),
    Question("theo_mediation_humaine", "choice",
             ("oui_absolument", "oui_pour_essentiel", "partiellement", "non_pas_necessairement", "ne_sait_pas")),
    Question("theo_risque_futur", "choice", ("paresse", "deshumanisation", "heresie", "autre", "aucune", "ne_sait_pas")),
    Question("theo_utilite_percue", "choice", ("tres_negatif", "negatif", "neutre", "positif", "tres_positif", "ne_sait_pas")),
    Question("communaute_position_officielle", "choice", ("oui_favorable", "oui_prudent", "oui_defavorable", "non", "ne_sait_pas")),
    Question("communaute_discussions", "choice", ("jamais", "rarement", "parfois", "souvent", "organise")),
    Question("communaute_perception_pairs", "choice",
             ("tres_favorable", "favorable", "neutre", "mefiant", "hostile", "ne_sait_pas")),
    Question("futur_intention_usage", "choice",
             ("non_certain", "non_probable", "peut_etre", "oui_probable", "oui_certain", "ne_sait_pas")),
    Question("futur_formation_souhait", "choice", ("non_pas_du_tout", "non_pas_vraiment", "peut_etre", "oui_assez", "oui_tres")),
    Question("futur_domaines_interet", "multiple",
             ("etude_bible", "preparation_predication", "catechese", "priere_meditation", "accompagnement",
              "communication", "administration", "musique_liturgie", "aucun")),
    *[Question(question_id, "choice", ("true", "false")) for question_id in MC_TARGETS],
]

CRS_QUESTION_IDS = ("crs_intellect", "crs_ideology", "crs_public_practice", "crs_private_practice", "crs_experience")
_OPTIONS = {question.id: question.options for question in SURVEY_QUESTIONS}


# --- Answer generators ---

def _pick(*options: str) -> Generator:
    return lambda rng, answers: rng.choice(options)


def _scale(low: int, high: int) -> Generator:
    return lambda rng, answers: rng.randint(low, high)


def _top(question_id: str, count: int = 2) -> Generator:
    options = _OPTIONS[question_id]
    return lambda rng, answers: rng.choice(options[-count:])


def _bottom(question_id: str, count: int = 2) -> Generator:
    options = _OPTIONS[question_id]
    return lambda rng, answers: rng.choice(options[:count])


def _calibration(question_id: str, over_claim_probability: float) -> Generator:
    target = MC_TARGETS[question_id]
    other = "true" if target == "false" else "false"
    return lambda rng, answers: target if rng.random() < over_claim_probability else other


def random_answer(question: Question, rng: random.Random) -> Any:
    if question.kind == "choice":
        return rng.choice(question.options)
    if question.kind == "multiple":
        return rng.sample(question.options, rng.randint(1, min(3, len(question.options))))
    if question.kind == "scale":
        return rng.randint(1, 5)
    if question.kind == "matrix":
        return {row: rng.randint(0, 3) for row in question.options}
    raise ValueError(f"Unknown question kind: {question.kind}")


def _non_spiritual_contexts(rng: random.Random, answers: Answers) -> List[str]:
    contexts = [c for c in _OPTIONS["ctrl_ia_contextes"] if c != "spirituel"]
    return rng.sample(contexts, rng.randint(1, 2))


def _spiritual_contexts(rng: random.Random, answers: Answers) -> List[str]:
    contexts = [c for c in _OPTIONS["ctrl_ia_contextes"] if c != "spirituel"]
    return ["spirituel", *rng.sample(contexts, rng.randint(1, 3))]


def _protect_everything(rng: random.Random, answers: Answers) -> List[str]:
    return [a for a in _OPTIONS["theo_activites_sacrees"] if a != "aucune"]


def _many_interests(rng: random.Random, answers: Answers) -> List[str]:
    interests = [i for i in _OPTIONS["futur_domaines_interet"] if i != "aucun"]
    return rng.sample(interests, rng.randint(3, 5))


def _delegation(low: int, high: int) -> Generator:
    return lambda rng, answers: {task: rng.randint(low, high) for task in SERMON_TASK_WEIGHTS}


TRADITIONALIST: Dict[str, Generator] = {
    "profil_statut": _pick("clerge", "religieux", "laic_pratiquant"),
    "profil_age": _pick("51-65", "66+"),
    "profil_taille_communaute": _pick("moyenne", "grande"),
    **{question_id: _top(question_id) for question_id in CRS_QUESTION_IDS},
    "theo_orientation": _pick("traditionaliste"),
    "ctrl_ia_frequence": _pick("jamais", "essaye"),
    "ctrl_ia_contextes": _non_spiritual_contexts,
    "ctrl_ia_confort": _scale(1, 2),
    "digital_attitude_generale": _pick("negatif", "tres_negatif"),
    "min_pred_usage": _pick("jamais", "rare"),
    "min_pred_nature": _delegation(0, 1),
    "min_pred_sentiment": _scale(3, 5),
    "min_care_email": _pick("non_jamais"),
    "min_admin_burden": _scale(1, 3),
    "laic_substitution_priere": _pick("non"),
    "laic_conseil_spirituel": _pick("jamais"),
    "psych_godspeed_nature": _pick("3_neutre", "4_humain_moins"),
    "psych_godspeed_conscience": _pick("incertain"),
    "psych_imago_dei": _pick("beaucoup", "totalement"),
    "psych_anxiete_remplacement": _pick("possible_partiel", "oui_probable"),
    "psych_aias_opacity": _pick("oui_moderement", "oui_fortement"),
    "theo_inspiration": _pick("impossible"),
    "theo_liturgie_ia": _scale(1, 2),
    "theo_activites_sacrees": _protect_everything,
    "theo_mediation_humaine": _pick("oui_absolument", "oui_pour_essentiel"),
    "theo_risque_futur": _pick("deshumanisation", "heresie", "paresse"),
    "theo_utilite_percue": _pick("negatif", "tres_negatif"),
    "communaute_position_officielle": _pick("oui_prudent", "oui_defavorable"),
    "communaute_discussions": _pick("souvent", "parfois"),
    "communaute_perception_pairs": _pick("mefiant", "hostile"),
    "futur_intention_usage": _pick("non_certain", "non_probable"),
    "futur_formation_souhait": _pick("non_pas_du_tout", "non_pas_vraiment"),
    "futur_domaines_interet": _pick(["aucun"]),
    **{question_id: _calibration(question_id, 0.2) for question_id in MC_TARGETS},
}

INNOVATOR: Dict[str, Generator] = {
    "profil_statut": _pick("clerge", "laic_engagé", "laic_pratiquant"),
    "profil_age": _pick("18-35", "36-50"),
    **{question_id: _top(question_id) for question_id in CRS_QUESTION_IDS},
    "theo_orientation": _pick("progressiste"),
    "ctrl_ia_frequence": _pick("regulier", "quotidien"),
    "ctrl_ia_contextes": _spiritual_contexts,
    "ctrl_ia_confort": _scale(4, 5),
    "digital_attitude_generale": _pick("positif", "tres_positif"),
    "min_pred_usage": _pick("regulier", "systematique"),
    "min_pred_nature": _delegation(1, 3),
    "min_pred_sentiment": _scale(1, 2),
    "min_care_email": _pick("oui_brouillon", "oui_souvent"),
    "min_admin_burden": _scale(4, 5),
    "laic_substitution_priere": _pick("oui_positif", "oui_neutre"),
    "laic_conseil_spirituel": _pick("oui_possible", "deja_fait"),
    "theo_inspiration": _pick("possible", "possible_indirect"),
    "theo_liturgie_ia": _scale(4, 5),
    "theo_activites_sacrees": _pick(["sacrements"], ["aucune"]),
    "theo_mediation_humaine": _pick("partiellement", "non_pas_necessairement"),
    "theo_risque_futur": _pick("autre", "aucune"),
    "theo_utilite_percue": _pick("positif", "tres_positif"),
    "futur_intention_usage": _pick("oui_probable", "oui_certain"),
    "futur_formation_souhait": _pick("oui_assez", "oui_tres"),
    "futur_domaines_interet": _many_interests,
}

SKEPTIC: Dict[str, Generator] = {
    "theo_orientation": _pick("modere"),
    "ctrl_ia_frequence": _pick("jamais", "essaye", "occasionnel"),
    "ctrl_ia_contextes": _non_spiritual_contexts,
    "ctrl_ia_confort": _scale(1, 2),
    "digital_attitude_generale": _bottom("digital_attitude_generale"),
    "min_pred_usage": _pick("jamais", "rare"),
    "min_care_email": _pick("non_jamais"),
    "laic_substitution_priere": _pick("non"),
    "laic_conseil_spirituel": _pick("jamais"),
    "psych_anxiete_remplacement": _pick("oui_probable", "oui_certain"),
    "psych_aias_opacity": _pick("oui_moderement", "oui_fortement"),
    "theo_inspiration": _pick("impossible", "peu_probable"),
    "theo_liturgie_ia": _scale(1, 2),
    "theo_activites_sacrees": _protect_everything,
    "theo_risque_futur": _pick("deshumanisation", "heresie"),
    "theo_utilite_percue": _pick("tres_negatif", "negatif"),
    "futur_intention_usage": _bottom("futur_intention_usage"),
}

PERSONAS: Dict[str, Dict[str, Generator]] = {
    "Random": {},
    "Traditionalist": TRADITIONALIST,
    "Innovator": INNOVATOR,
    "Skeptic": SKEPTIC,
}
PERSONA_TYPES: Tuple[str, ...] = tuple(PERSONAS)


def generate_submission(persona: str, rng: random.Random) -> Answers:
    """
    One simulated submission. Questions whose display condition fails for
    the answers so far are skipped, as the survey would.
    """
    overrides = PERSONAS[persona]
    answers: Answers = {}
    for question in SURVEY_QUESTIONS:
        if question.condition is not None and not question.condition(answers):
            continue
        generator = overrides.get(question.id)
        answers[question.id] = generator(rng, answers) if generator else random_answer(question, rng)
    return answers


def run_simulation(
    iterations: int = 250,
    seed: Optional[int] = None,
    personas: Sequence[str] = PERSONA_TYPES,
) -> pd.DataFrame:
    """
    Scores ``iterations`` submissions per persona. One row per trial with
    the persona, primary/secondary/sub-profile, primary score and the seven
    dimension values. The same seed always yields the same frame.
    """
    rng = random.Random(seed)
    rows = []
    for persona in personas:
        for trial in range(iterations):
            spectrum = calculate_profile_spectrum(generate_submission(persona, rng))
            row = {
                "persona": persona,
                "trial": trial,
                "primary": spectrum.primary.profile,
                "match_score": spectrum.primary.match_score,
                "secondary": spectrum.secondary.profile if spectrum.secondary else None,
                "sub_profile": spectrum.sub_profile.sub_profile,
            }
            row.update(spectrum.dimensions.value_map())
            rows.append(row)

    logger.info("Simulation finished", extra={"personas": list(personas), "trials": len(rows)})
    columns = ["persona", "trial", "primary", "match_score", "secondary", "sub_profile", *DIMENSION_NAMES]
    return pd.DataFrame(rows, columns=columns)


def results_matrix(frame: pd.DataFrame) -> pd.DataFrame:
    """Share (%) of each persona's trials assigned to each primary profile."""
    return (pd.crosstab(frame["persona"], frame["primary"], normalize="index") * 100).round(1)


if __name__ == "__main__":
    import argparse

    from .logging_config import setup_logging

    parser = argparse.ArgumentParser(description="Run the persona survey simulation")
    parser.add_argument("--iterations", type=int, default=250, help="Trials per persona.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs.")
    args = parser.parse_args()

    setup_logging()
    results = run_simulation(args.iterations, args.seed)
    print("Results matrix (persona -> assigned profile, %):")
    print(results_matrix(results).to_string())
