"""
Cocktail API — Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract.
Why:   Automatic serialization and OpenAPI doc generation.
How:   Route handlers return these models; FastAPI serializes them by alias.

Two drink shapes exist:
    Drink                 Catalog record. Serialized in the CocktailDB layout
                          (idDrink, strDrink, strIngredient1..15, ...).
    DrinkMutationResult   What create/update echo back (camelCase createdAt).

Request bodies for create/update are checked by
`cocktail_api.middleware.validation` first (to collect every violation), and
only then parsed into DrinkPayload.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer

MAX_INGREDIENTS = 15

AlcoholicKind = Literal["Alcoholic", "Non alcoholic", "Optional alcohol"]
ALCOHOLIC_VALUES = ("Alcoholic", "Non alcoholic", "Optional alcohol")


# ══════════════════════════════════════════════════════════════════════════
# Catalog Models
# ══════════════════════════════════════════════════════════════════════════


class Ingredient(BaseModel):
    name: str
    measure: Optional[str] = None


class Drink(BaseModel):
    """
    A read-only catalog record.

    Ingredients are held as an ordered list and flattened to the fifteen
    numbered CocktailDB slots on output; unused slots serialize as null.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    alcoholic: AlcoholicKind
    glass: str
    instructions: str
    ingredients: List[Ingredient] = Field(default_factory=list, max_length=MAX_INGREDIENTS)
    image: Optional[str] = None
    alternate_name: Optional[str] = None
    tags: Optional[str] = None
    video: Optional[str] = None
    iba: Optional[str] = None
    instructions_es: Optional[str] = None
    instructions_de: Optional[str] = None
    instructions_fr: Optional[str] = None
    instructions_it: Optional[str] = None
    image_source: Optional[str] = None
    image_attribution: Optional[str] = None
    creative_commons_confirmed: Optional[str] = None
    date_modified: Optional[str] = None

    @model_serializer(mode="plain")
    def to_cocktaildb(self) -> Dict[str, Optional[str]]:
        record: Dict[str, Optional[str]] = {
            "idDrink": self.id,
            "strDrink": self.name,
            "strDrinkAlternate": self.alternate_name,
            "strTags": self.tags,
            "strVideo": self.video,
            "strCategory": self.category,
            "strIBA": self.iba,
            "strAlcoholic": self.alcoholic,
            "strGlass": self.glass,
            "strInstructions": self.instructions,
            "strInstructionsES": self.instructions_es,
            "strInstructionsDE": self.instructions_de,
            "strInstructionsFR": self.instructions_fr,
            "strInstructionsIT": self.instructions_it,
            "strDrinkThumb": self.image,
        }
        for slot in range(1, MAX_INGREDIENTS + 1):
            ingredient = self.ingredients[slot - 1] if slot <= len(self.ingredients) else None
            record[f"strIngredient{slot}"] = ingredient.name if ingredient else None
        for slot in range(1, MAX_INGREDIENTS + 1):
            ingredient = self.ingredients[slot - 1] if slot <= len(self.ingredients) else None
            record[f"strMeasure{slot}"] = ingredient.measure if ingredient else None
        record.update(
            {
                "strImageSource": self.image_source,
                "strImageAttribution": self.image_attribution,
                "strCreativeCommonsConfirmed": self.creative_commons_confirmed,
                "dateModified": self.date_modified,
            }
        )
        return record


class DrinkSearchResponse(BaseModel):
    """Returned by GET /drinks?search=..., including the zero-result case."""

    success: bool = True
    message: str
    data: List[Drink]
    total: int


class RandomDrinkResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[Drink] = None


# ══════════════════════════════════════════════════════════════════════════
# Mutation Models
# ══════════════════════════════════════════════════════════════════════════


class IngredientPayload(BaseModel):
    name: str
    measure: Optional[str] = None


class DrinkPayload(BaseModel):
    """Body of POST /drinks and PATCH /drinks/{id} after validation."""

    name: str
    category: str
    alcoholic: AlcoholicKind
    glass: str
    instructions: str
    ingredients: List[IngredientPayload]
    image: Optional[str] = None


class DrinkMutationResult(BaseModel):
    """
    The echoed-back record. Never persisted: two requests only observe the same
    record if the client sends identical input (and, for update, the same id).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    category: str
    alcoholic: str
    glass: str
    instructions: str
    ingredients: List[Ingredient]
    image: Optional[str] = None
    created_at: str = Field(alias="createdAt")


class DrinkMutationResponse(BaseModel):
    success: bool = True
    message: str
    data: DrinkMutationResult


class DeleteDrinkResponse(BaseModel):
    success: bool = True
    message: str


# ══════════════════════════════════════════════════════════════════════════
# Auth Helper Models
# ══════════════════════════════════════════════════════════════════════════


class PrincipalOut(BaseModel):
    id: str
    username: str
    role: str
    permissions: List[str]


class PrincipalResponse(BaseModel):
    success: bool = True
    data: PrincipalOut


class PrincipalListResponse(BaseModel):
    success: bool = True
    data: List[PrincipalOut]
    total: int


class TokenRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)


class Credentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    api_key: str = Field(alias="apiKey")
    token: str
    token_type: str = Field(default="Bearer", alias="tokenType")


class TokenResponse(BaseModel):
    success: bool = True
    data: Credentials


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body. Context-specific fields (hint, details,
    userPermissions, userRole, retryAfter, example) ride alongside.
    """

    model_config = ConfigDict(extra="allow")

    error: str = Field(description="Short error label, e.g. 'Unauthorized'")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    drinks: int = Field(description="Number of drinks in the catalog")
    rate_limit_keys: Dict[str, int] = Field(description="Active window count per limiter")
    uptime_seconds: float = Field(description="Seconds since service started")
