from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProfileConfigurationError(ValueError):
    """Raised when the static profile catalogue is corrupt or structurally invalid."""
    pass


DIMENSION_NAMES: Tuple[str, ...] = (
    "religiosity",
    "ai_openness",
    "sacred_boundary",
    "ethical_concern",
    "psychological_perception",
    "community_influence",
    "future_orientation",
)

PrimaryProfile = Literal[
    "gardien_tradition",
    "prudent_eclaire",
    "innovateur_ancre",
    "equilibriste",
    "pragmatique_moderne",
    "pionnier_spirituel",
    "progressiste_critique",
    "explorateur",
]

SubProfileType = Literal[
    # Gardien de la Tradition
    "protecteur_sacre", "sage_prudent", "berger_communautaire",
    # Prudent Éclairé
    "analyste_spirituel", "discerneur_pastoral", "observateur_engage",
    # Innovateur Ancré
    "pont_generationnel", "evangeliste_digital", "theologien_techno",
    # Équilibriste
    "mediateur", "chercheur_sens", "adaptateur_prudent",
    # Pragmatique Moderne
    "efficace_engage", "communicateur_digital", "optimisateur_pastoral",
    # Pionnier Spirituel
    "visionnaire", "experimentateur", "prophete_digital",
    # Progressiste Critique
    "ethicien", "reformateur_social", "philosophe_spirituel",
    # Explorateur
    "curieux_spirituel", "novice_technologique", "chercheur_seculier",
]

DimensionName = Literal[
    "religiosity",
    "ai_openness",
    "sacred_boundary",
    "ethical_concern",
    "psychological_perception",
    "community_influence",
    "future_orientation",
]

InsightCategory = Literal["spiritual", "technological", "ethical", "relational", "developmental"]
Emphasis = Literal["high", "low", "moderate"]


class RespondentRole(str, Enum):
    CLERGY = "clergy"
    LAYPERSON = "layperson"
    UNKNOWN = "unknown"


class CamelModel(BaseModel):
    """Base for result objects; dumps with camelCase keys when ``by_alias=True``."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Scoring results ---

class DimensionScore(CamelModel):
    value: float = Field(..., ge=1.0, le=5.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    percentile: int = Field(..., ge=1, le=99)


class SevenDimensions(CamelModel):
    religiosity: DimensionScore
    ai_openness: DimensionScore
    sacred_boundary: DimensionScore
    ethical_concern: DimensionScore
    psychological_perception: DimensionScore
    community_influence: DimensionScore
    future_orientation: DimensionScore

    def value_map(self) -> Dict[str, float]:
        """Plain ``{dimension: value}`` mapping in canonical dimension order."""
        return {name: getattr(self, name).value for name in DIMENSION_NAMES}


class ProfileMatch(CamelModel):
    profile: PrimaryProfile
    match_score: int = Field(..., ge=0, le=100)
    distance: float = Field(..., ge=0.0)


class SubProfileMatch(CamelModel):
    sub_profile: SubProfileType
    match_score: int = Field(..., ge=0, le=100)
    description: str


class ProfileInterpretation(CamelModel):
    headline: str
    narrative: str
    unique_aspects: List[str]
    blind_spots: List[str]
    strengths: List[str]


class AdvancedInsight(CamelModel):
    category: InsightCategory
    icon: str
    title: str
    message: str
    priority: int = Field(..., ge=1, le=10)


class TensionPoint(CamelModel):
    dimension1: DimensionName
    dimension2: DimensionName
    description: str
    suggestion: str


class GrowthArea(CamelModel):
    area: str
    current_state: str
    potential_growth: str
    actionable_step: str
    priority: int = Field(..., ge=1, le=10)


class ProfileSpectrum(CamelModel):
    primary: ProfileMatch
    secondary: Optional[ProfileMatch] = None
    tertiary: Optional[ProfileMatch] = None
    all_matches: List[ProfileMatch]
    sub_profile: SubProfileMatch
    dimensions: SevenDimensions
    interpretation: ProfileInterpretation
    insights: List[AdvancedInsight]
    tensions: List[TensionPoint]
    growth_areas: List[GrowthArea]


class SecondaryProfileSummary(CamelModel):
    profile: PrimaryProfile
    title: str
    match_percentage: int


class EnhancedProfileData(CamelModel):
    profile: PrimaryProfile
    title: str
    emoji: str
    description: str
    match_percentage: int
    secondary_profile: Optional[SecondaryProfileSummary] = None
    dimensions: SevenDimensions
    strengths: List[str]
    blind_spots: List[str]
    insights: List[AdvancedInsight]
    tensions: List[TensionPoint]
    growth_areas: List[GrowthArea]


# --- Static catalogue definitions ---

class PopulationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    mean: float
    std_dev: float = Field(..., ge=0.0)
    note: str = ""


class DimensionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: DimensionName
    label: str
    label_en: str
    description: str
    low_description: str
    high_description: str
    validation_status: Literal["validated", "exploratory"]
    source_instrument: Optional[str] = None
    bias_sensitivity: float = Field(..., ge=0.0, le=1.0)
    neutral_default: float = Field(3.0, ge=1.0, le=5.0)
    expected_items: int = Field(..., gt=0)
    population: PopulationParams


class IdealPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    dimension: DimensionName
    emphasis: Emphasis


class ProfileDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PrimaryProfile
    title: str
    title_en: str
    emoji: str
    short_description: str
    full_description: str
    ideal_dimensions: Dict[str, Tuple[float, float]]
    weights: Dict[str, float]
    core_motivation: str
    primary_fear: str
    communication_style: str
    challenge: str
    sub_profiles: Tuple[SubProfileType, ...]


class SubProfileDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: SubProfileType
    parent_profile: PrimaryProfile
    title: str
    emoji: str
    description: str
    distinguishing_traits: Tuple[str, ...]
    ideal_pattern: Tuple[IdealPattern, ...]


class ProfileCatalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    dimensions: Tuple[DimensionDefinition, ...]
    profiles: Tuple[ProfileDefinition, ...]
    sub_profiles: Tuple[SubProfileDefinition, ...]

    def dimension(self, name: str) -> DimensionDefinition:
        for definition in self.dimensions:
            if definition.id == name:
                return definition
        raise KeyError(name)

    def profile(self, profile_id: str) -> ProfileDefinition:
        for definition in self.profiles:
            if definition.id == profile_id:
                return definition
        raise KeyError(profile_id)

    def sub_profile(self, sub_profile_id: str) -> SubProfileDefinition:
        for definition in self.sub_profiles:
            if definition.id == sub_profile_id:
                return definition
        raise KeyError(sub_profile_id)

    def children_of(self, profile_id: str) -> List[SubProfileDefinition]:
        """Sub-profiles of a primary profile, in the parent's declared order."""
        parent = self.profile(profile_id)
        return [self.sub_profile(child_id) for child_id in parent.sub_profiles]
