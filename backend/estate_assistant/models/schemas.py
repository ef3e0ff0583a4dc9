"""
Pydantic schemas for lead scoring, agent context, tool calls and the API.
"""

import logging
from typing import Annotated, Optional, List, Any, Dict, Union, Literal
from pydantic import BaseModel, Field, AliasChoices, ValidationError, field_validator

from .state import ToolName, get_tool_name
from ..utils.helpers import extract_property_ids, parse_price_string

logger = logging.getLogger(__name__)


# ============================================================
# Lead scoring
# ============================================================

class ClientPreferences(BaseModel):
    """Preferences a client submits during onboarding."""

    budget_min: float = Field(..., description="Minimum budget in USD")
    budget_max: float = Field(..., description="Maximum budget in USD")
    rent_or_buy: Literal["rent", "buy"] = Field(..., description="Whether the client wants to rent or buy")
    bedrooms: float = Field(..., description="Number of bedrooms required")
    bathrooms: float = Field(..., description="Number of bathrooms required")
    location: str = Field(..., description="Preferred location (free text)")
    amenities: List[str] = Field(default_factory=list, description="Requested amenities")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "budget_min": 500000,
                "budget_max": 550000,
                "rent_or_buy": "buy",
                "bedrooms": 3,
                "bathrooms": 2,
                "location": "Downtown Loft",
                "amenities": ["Parking", "Gym", "Pool", "Balcony", "Garden"]
            }
        }


class ScoreBreakdown(BaseModel):
    """Per-category sub-scores of a lead score."""

    budget: int = 0
    urgency: int = 0
    commitment: int = 0
    location: int = 0
    preferences: int = 0


class LeadScore(BaseModel):
    """Result of scoring a lead."""

    total_score: int = Field(..., alias="totalScore")
    score_breakdown: ScoreBreakdown = Field(..., alias="scoreBreakdown")
    qualification: Literal["Hot", "Warm", "Cold"]
    recommendations: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


# ============================================================
# Agent context
# ============================================================

class BrokerProfile(BaseModel):
    """Broker the assistant speaks as."""

    id: Optional[str] = None
    name: Optional[str] = None
    years_experience: Optional[int] = Field(
        None, validation_alias=AliasChoices("years_experience", "years_of_experience")
    )
    service_area: Optional[str] = Field(
        None, validation_alias=AliasChoices("service_area", "area_of_service")
    )
    email: Optional[str] = None


class ClientProfile(BaseModel):
    """
    Client the broker is chatting about.

    Preference fields are optional so that a client can chat before
    finishing onboarding.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    broker_id: Optional[str] = None
    rent_or_buy: Optional[Literal["rent", "buy"]] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    location: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)

    def has_preferences(self) -> bool:
        """True when every field the lead scorer needs is filled in."""
        return None not in (
            self.rent_or_buy, self.budget_min, self.budget_max,
            self.bedrooms, self.bathrooms, self.location,
        )

    def preferences(self) -> Optional[ClientPreferences]:
        if not self.has_preferences():
            return None
        return ClientPreferences(
            budget_min=self.budget_min,
            budget_max=self.budget_max,
            rent_or_buy=self.rent_or_buy,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            location=self.location,
            amenities=list(self.amenities),
        )


class AgentContext(BaseModel):
    """Broker and client context, read-only for one chat exchange."""

    broker_profile: Optional[BrokerProfile] = None
    client_profile: Optional[ClientProfile] = None

    class Config:
        frozen = True

    @property
    def broker_id(self) -> str:
        return (self.broker_profile.id if self.broker_profile else None) or ""

    @property
    def client_id(self) -> str:
        return (self.client_profile.id if self.client_profile else None) or ""


# ============================================================
# Tool parameters (one variant per tool)
# ============================================================

class SearchPropertiesParams(BaseModel):
    tool: Literal["search_properties"] = "search_properties"
    location: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    property_type: Optional[Literal["house", "apartment", "condo", "townhouse", "any"]] = None
    amenities: Optional[List[str]] = None


class AnalyzePropertyParams(BaseModel):
    tool: Literal["analyze_property"] = "analyze_property"
    property_id: Optional[str] = None
    analysis_type: Literal[
        "market_value", "investment_potential", "neighborhood_info", "comprehensive"
    ] = "comprehensive"


class ComparePropertiesParams(BaseModel):
    tool: Literal["compare_properties"] = "compare_properties"
    property_ids: List[str] = Field(default_factory=list)
    comparison_criteria: List[str] = Field(default_factory=list)


class AnalyzeMarketParams(BaseModel):
    tool: Literal["analyze_market"] = "analyze_market"
    location: Optional[str] = None
    analysis_type: Literal[
        "price_trends", "inventory_levels", "days_on_market", "comprehensive"
    ] = "comprehensive"


class SetupShowingParams(BaseModel):
    tool: Literal["setup_showing"] = "setup_showing"
    property_id: Optional[str] = None
    preferred_time: Optional[str] = None


class GeneralHelpParams(BaseModel):
    tool: Literal["general_help"] = "general_help"


ToolParameters = Annotated[
    Union[
        SearchPropertiesParams,
        AnalyzePropertyParams,
        ComparePropertiesParams,
        AnalyzeMarketParams,
        SetupShowingParams,
        GeneralHelpParams,
    ],
    Field(discriminator="tool"),
]

TOOL_PARAMETER_MODELS = {
    ToolName.SEARCH_PROPERTIES: SearchPropertiesParams,
    ToolName.ANALYZE_PROPERTY: AnalyzePropertyParams,
    ToolName.COMPARE_PROPERTIES: ComparePropertiesParams,
    ToolName.ANALYZE_MARKET: AnalyzeMarketParams,
    ToolName.SETUP_SHOWING: SetupShowingParams,
    ToolName.GENERAL_HELP: GeneralHelpParams,
}

_LIST_FIELDS = ("amenities", "comparison_criteria")
_ROOM_FIELDS = ("bedrooms", "bathrooms")
_CHOICE_FIELDS = ("property_type", "analysis_type")
_BUDGET_FIELDS = ("budget_min", "budget_max")


def _coerce_parameter(name: str, value: Any) -> Any:
    """Bring common LLM spellings of a parameter into the declared shape."""
    if name == "property_ids":
        if isinstance(value, str):
            return extract_property_ids(value) or [p.strip() for p in value.split(",") if p.strip()]
        if isinstance(value, list):
            return [str(v) for v in value]

    if name in _LIST_FIELDS:
        if isinstance(value, str):
            return [p.strip() for p in value.split(",") if p.strip()]
        if isinstance(value, list):
            return [str(v) for v in value]

    if name in _ROOM_FIELDS and isinstance(value, (int, float, str)) and not isinstance(value, bool):
        try:
            # Half rooms round up
            return int(float(value) + 0.5)
        except ValueError:
            return value

    if name in _CHOICE_FIELDS and isinstance(value, str):
        return value.strip().lower()

    if name in _BUDGET_FIELDS and isinstance(value, str):
        return parse_price_string(value) or value

    return value


def parse_tool_parameters(tool: ToolName, raw: Optional[Dict[str, Any]]) -> ToolParameters:
    """
    Validate a free-form parameter payload into the variant for ``tool``.

    The classifier's parameters are free-form, so values are coerced where
    the intent is clear and any field that still fails validation is
    dropped in favour of the variant default. Null values are dropped too.
    """
    tool = ToolName(tool)
    model = TOOL_PARAMETER_MODELS[tool]

    payload = {
        name: _coerce_parameter(name, value)
        for name, value in (raw if isinstance(raw, dict) else {}).items()
        if value is not None and name != "tool"
    }
    payload["tool"] = tool.value

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        invalid = {err["loc"][0] for err in e.errors() if err["loc"]}
        logger.warning(f"Dropping invalid {tool.value} parameters: {sorted(invalid)}")
        return model.model_validate(
            {name: value for name, value in payload.items() if name not in invalid}
        )


class ToolDecision(BaseModel):
    """What the classifier returns for a chat message."""

    tool: ToolName
    parameters: Dict[str, Any] = Field(default_factory=dict)
    response: str = ""

    @field_validator("tool", mode="before")
    @classmethod
    def _normalize_tool(cls, value):
        if isinstance(value, ToolName):
            return value
        return get_tool_name(str(value))

    @field_validator("parameters", mode="before")
    @classmethod
    def _default_parameters(cls, value):
        return value if isinstance(value, dict) else {}


# ============================================================
# Tool results
# ============================================================

class PropertyListing(BaseModel):
    """A generated property listing."""

    id: str
    address: str
    price: int
    bedrooms: int
    bathrooms: int
    sqft: int
    property_type: str
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    description: str = ""


class PropertySearchResult(BaseModel):
    tool: Literal["search_properties"] = "search_properties"
    success: bool = True
    properties: List[PropertyListing] = Field(default_factory=list)
    total: int = 0
    search_criteria: Dict[str, Any] = Field(default_factory=dict)


class PropertyAnalysis(BaseModel):
    market_value: int
    estimated_rent: int
    property_taxes: int
    neighborhood_rating: float
    investment_score: int
    days_on_market: int
    price_per_sqft: int
    address: Optional[str] = None
    listed_price: Optional[int] = None


class PropertyAnalysisResult(BaseModel):
    tool: Literal["analyze_property"] = "analyze_property"
    success: bool = True
    property_id: Optional[str] = None
    analysis: PropertyAnalysis
    analysis_type: str = "comprehensive"


class PriceComparisonEntry(BaseModel):
    property_id: str
    property_address: str
    price: int
    price_per_sqft: int


class FeatureComparisonEntry(BaseModel):
    property_id: str
    property_address: str
    bedrooms: int
    bathrooms: int
    sqft: int


class PropertyComparison(BaseModel):
    price_comparison: List[PriceComparisonEntry] = Field(default_factory=list)
    feature_comparison: List[FeatureComparisonEntry] = Field(default_factory=list)
    fit_scores: Dict[str, int] = Field(default_factory=dict)
    recommended_property_id: str
    recommendation: str


class PropertyComparisonResult(BaseModel):
    tool: Literal["compare_properties"] = "compare_properties"
    success: bool = True
    comparison: PropertyComparison
    property_ids: List[str] = Field(default_factory=list)
    criteria: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class MarketAnalysis(BaseModel):
    average_price: int
    price_trend: Literal["increasing", "decreasing"]
    days_on_market: int
    inventory_level: Literal["low", "high"]
    market_activity: Literal["active", "slow"]
    forecast: str


class MarketAnalysisResult(BaseModel):
    tool: Literal["analyze_market"] = "analyze_market"
    success: bool = True
    location: str
    market_analysis: MarketAnalysis
    analysis_type: str = "comprehensive"


class ShowingSchedule(BaseModel):
    available_slots: List[str]
    preferred_time: str
    duration: str
    meeting_location: str
    contact_info: Optional[str] = None
    notes: str = ""
    property_id: Optional[str] = None


class ShowingResult(BaseModel):
    tool: Literal["setup_showing"] = "setup_showing"
    success: bool = True
    showing: ShowingSchedule
    client_name: Optional[str] = None
    broker_name: Optional[str] = None


class ToolFailure(BaseModel):
    """Structured result for malformed or missing tool input."""

    tool: ToolName
    success: Literal[False] = False
    error: str


ToolResult = Union[
    PropertySearchResult,
    PropertyAnalysisResult,
    PropertyComparisonResult,
    MarketAnalysisResult,
    ShowingResult,
    ToolFailure,
]


class ChatResult(BaseModel):
    """What one chat exchange returns."""

    response: str
    tool_used: ToolName
    tool_result: Optional[ToolResult] = None


# ============================================================
# API models
# ============================================================

class ChatRequest(BaseModel):
    """Request model for the chat endpoint."""

    message: str = Field(..., description="The broker's or client's message")
    broker_data: Optional[BrokerProfile] = Field(None, alias="brokerData")
    client_data: Optional[ClientProfile] = Field(None, alias="clientData")
    selected_properties: List[str] = Field(default_factory=list, alias="selectedProperties")
    session_id: Optional[str] = Field(None, description="Session identifier (defaults to broker:client)")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "message": "Find me 3-bedroom homes downtown under $600k",
                "brokerData": {"id": "b1", "name": "Dana Reyes", "years_experience": 8},
                "clientData": {"id": "c1", "name": "Sam Lee", "rent_or_buy": "buy"},
                "selectedProperties": []
            }
        }


class ChatResponse(BaseModel):
    """Response model for the chat endpoint."""

    success: bool
    response: str
    tool_used: Optional[str] = None
    tool_result: Optional[Dict[str, Any]] = None
    session_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    router_mode: str = Field(..., description="'llm' or 'rules'")
    llm_configured: bool = Field(..., description="Whether an OpenAI API key is configured")
