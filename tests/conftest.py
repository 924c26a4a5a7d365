import pytest


def create_base_answers(**overrides):
    """A moderate lay respondent with low social desirability bias."""
    answers = {
        # Profile
        "profil_statut": "laic_pratiquant",
        "profil_age": "36-50",
        "profil_taille_communaute": "moyenne",

        # Basic AI usage
        "ctrl_ia_frequence": "occasionnel",
        "ctrl_ia_confort": 3,
        "ctrl_ia_contextes": ["travail"],
        "digital_attitude_generale": "neutre",

        # Theology
        "theo_orientation": "modere",
        "theo_inspiration": "possible_indirect",
        "theo_liturgie_ia": 3,
        "theo_activites_sacrees": ["confession", "eucharistie"],
        "theo_mediation_humaine": "partiellement",
        "theo_risque_futur": "autre",
        "theo_utilite_percue": "neutre",

        # Psychological
        "psych_godspeed_nature": "3_neutre",
        "psych_godspeed_conscience": "incertain",
        "psych_imago_dei": "moderement",
        "psych_anxiete_remplacement": "possible_partiel",
        "psych_aias_opacity": "peu",

        # Community
        "communaute_position_officielle": "ne_sait_pas",
        "communaute_discussions": "rarement",
        "communaute_perception_pairs": "neutre",

        # Future
        "futur_intention_usage": "peut_etre",
        "futur_formation_souhait": "peut_etre",
        "futur_domaines_interet": ["administration"],

        # CRS-5, moderate
        "crs_intellect": "occasionnellement",
        "crs_ideology": "moderement",
        "crs_public_practice": "mensuel",
        "crs_private_practice": "occasionnellement",
        "crs_experience": "moderement",

        # Marlowe-Crowne, none in the over-claiming direction
        "ctrl_mc_1": "true",
        "ctrl_mc_2": "false",
        "ctrl_mc_3": "true",
        "ctrl_mc_4": "false",
        "ctrl_mc_5": "true",
    }
    answers.update(overrides)
    return answers


@pytest.fixture
def base_answers():
    return create_base_answers()


@pytest.fixture
def empty_answers():
    return {}


@pytest.fixture
def minimal_answers():
    return {
        "profil_statut": "laic_pratiquant",
        "ctrl_ia_frequence": "occasionnel",
        "crs_intellect": "occasionnellement",
        "crs_ideology": "moderement",
        "crs_public_practice": "mensuel",
        "crs_private_practice": "occasionnellement",
        "crs_experience": "moderement",
    }


# --- Profile archetypes ---

@pytest.fixture
def gardien_answers():
    """High religiosity, low AI openness, strict sacred boundary."""
    return create_base_answers(
        profil_statut="clerge",
        theo_orientation="traditionaliste",
        crs_intellect="tres_souvent",
        crs_ideology="totalement",
        crs_public_practice="pluri_hebdo",
        crs_private_practice="pluri_quotidien",
        crs_experience="totalement",
        ctrl_ia_frequence="jamais",
        ctrl_ia_confort=1,
        ctrl_ia_contextes=[],
        digital_attitude_generale="negatif",
        theo_liturgie_ia=1,
        theo_activites_sacrees=["confession", "eucharistie", "predication", "benediction", "accompagnement"],
        theo_mediation_humaine="oui_absolument",
        theo_inspiration="impossible",
        theo_risque_futur="deshumanisation",
        theo_utilite_percue="negatif",
        communaute_position_officielle="oui_prudent",
        communaute_discussions="souvent",
        communaute_perception_pairs="mefiant",
        futur_intention_usage="non_certain",
        futur_formation_souhait="non_pas_du_tout",
        futur_domaines_interet=["aucun"],
    )


@pytest.fixture
def pionnier_answers():
    """High AI openness, porous sacred boundary, progressive theology."""
    return create_base_answers(
        theo_orientation="progressiste",
        crs_intellect="souvent",
        crs_ideology="beaucoup",
        crs_public_practice="hebdo",
        crs_private_practice="quotidien",
        crs_experience="beaucoup",
        ctrl_ia_frequence="quotidien",
        ctrl_ia_confort=5,
        ctrl_ia_contextes=["travail", "personnel", "spirituel", "creatif"],
        digital_attitude_generale="tres_positif",
        theo_liturgie_ia=5,
        theo_activites_sacrees=["aucune"],
        theo_mediation_humaine="non_pas_necessairement",
        theo_inspiration="possible",
        theo_risque_futur="aucune",
        theo_utilite_percue="tres_positif",
        communaute_discussions="parfois",
        futur_intention_usage="oui_certain",
        futur_formation_souhait="oui_tres",
        futur_domaines_interet=["priere_meditation", "catechese", "communication", "administration", "accompagnement"],
    )


@pytest.fixture
def equilibriste_answers():
    return create_base_answers(
        ctrl_ia_contextes=["travail", "personnel"],
        communaute_discussions="parfois",
    )


@pytest.fixture
def progressiste_answers():
    """High ethical concern, moderate AI openness, progressive theology."""
    return create_base_answers(
        theo_orientation="progressiste",
        crs_intellect="souvent",
        crs_ideology="beaucoup",
        crs_public_practice="hebdo",
        crs_private_practice="souvent",
        crs_experience="beaucoup",
        ctrl_ia_contextes=["travail", "personnel"],
        theo_liturgie_ia=2,
        theo_activites_sacrees=["confession", "eucharistie", "accompagnement"],
        theo_mediation_humaine="oui_pour_essentiel",
        theo_risque_futur="deshumanisation",
        psych_aias_opacity="oui_fortement",
        psych_imago_dei="beaucoup",
        psych_godspeed_nature="4_humain_moins",
        psych_godspeed_conscience="possible_emergence",
        futur_intention_usage="oui_probable",
        futur_formation_souhait="oui_assez",
    )


@pytest.fixture
def explorateur_answers():
    """Lower religiosity and many undecided answers."""
    return create_base_answers(
        profil_statut="curieux",
        theo_orientation="ne_sait_pas",
        crs_intellect="rarement",
        crs_ideology="peu",
        crs_public_practice="quelques_fois_an",
        crs_private_practice="rarement",
        crs_experience="peu",
        ctrl_ia_contextes=["personnel"],
        digital_attitude_generale="positif",
        theo_inspiration="ne_sait_pas",
        theo_utilite_percue="ne_sait_pas",
        psych_imago_dei="ne_sait_pas",
        psych_anxiete_remplacement="ne_sait_pas",
        theo_risque_futur="ne_sait_pas",
        communaute_discussions="jamais",
        communaute_perception_pairs="ne_sait_pas",
        futur_formation_souhait="oui_assez",
    )


@pytest.fixture
def innovateur_answers():
    """High religiosity combined with high AI openness."""
    return create_base_answers(
        profil_statut="clerge",
        theo_orientation="traditionaliste",
        crs_intellect="tres_souvent",
        crs_ideology="totalement",
        crs_public_practice="pluri_hebdo",
        crs_private_practice="pluri_quotidien",
        crs_experience="totalement",
        ctrl_ia_frequence="quotidien",
        ctrl_ia_confort=5,
        ctrl_ia_contextes=["travail", "personnel", "creatif", "spirituel"],
        digital_attitude_generale="tres_positif",
        theo_liturgie_ia=4,
        theo_activites_sacrees=["confession"],
        theo_inspiration="possible_indirect",
        theo_risque_futur="paresse",
        theo_utilite_percue="positif",
        futur_intention_usage="oui_certain",
        futur_formation_souhait="oui_tres",
        futur_domaines_interet=["catechese", "communication", "administration"],
    )


# --- Clergy and lay respondents ---

@pytest.fixture
def clergy_answers():
    return create_base_answers(
        profil_statut="clerge",
        min_pred_usage="regulier",
        min_pred_sentiment=3,
        min_care_email="oui_brouillon",
        min_admin_burden=4,
    )


@pytest.fixture
def clergy_no_ai_answers():
    return create_base_answers(
        profil_statut="clerge",
        ctrl_ia_frequence="jamais",
        ctrl_ia_confort=1,
        ctrl_ia_contextes=[],
        min_pred_usage="jamais",
        min_care_email="non_jamais",
        min_admin_burden=2,
    )


@pytest.fixture
def layperson_answers():
    return create_base_answers(
        profil_statut="laic_engagé",
        laic_substitution_priere="oui_neutre",
        laic_conseil_spirituel="complement",
    )


@pytest.fixture
def layperson_no_spiritual_ai_answers():
    return create_base_answers(
        ctrl_ia_frequence="regulier",
        ctrl_ia_confort=4,
        ctrl_ia_contextes=["travail", "personnel"],
        laic_substitution_priere="non",
        laic_conseil_spirituel="jamais",
    )


# --- Bias scenarios ---

@pytest.fixture
def high_bias_answers():
    """Every calibration item answered in the over-claiming direction."""
    return create_base_answers(
        ctrl_mc_1="false",
        ctrl_mc_2="true",
        ctrl_mc_3="false",
        ctrl_mc_4="true",
        ctrl_mc_5="false",
    )


@pytest.fixture
def low_bias_answers():
    return create_base_answers()


# --- Extremes ---

@pytest.fixture
def extreme_high_answers():
    return create_base_answers(
        crs_intellect="tres_souvent",
        crs_ideology="totalement",
        crs_public_practice="pluri_hebdo",
        crs_private_practice="pluri_quotidien",
        crs_experience="totalement",
        ctrl_ia_frequence="quotidien",
        ctrl_ia_confort=5,
        ctrl_ia_contextes=["travail", "personnel", "spirituel", "creatif"],
        theo_liturgie_ia=5,
        futur_intention_usage="oui_certain",
        futur_formation_souhait="oui_tres",
    )


@pytest.fixture
def extreme_low_answers():
    return create_base_answers(
        crs_intellect="jamais",
        crs_ideology="pas_du_tout",
        crs_public_practice="jamais",
        crs_private_practice="jamais",
        crs_experience="pas_du_tout",
        ctrl_ia_frequence="jamais",
        ctrl_ia_confort=1,
        ctrl_ia_contextes=[],
        theo_liturgie_ia=1,
        futur_intention_usage="non_certain",
        futur_formation_souhait="non_pas_du_tout",
    )
