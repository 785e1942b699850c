from typing import List, Optional

from fastapi import APIRouter, HTTPException

from bloom.support.catalog import TIPS, find_prompts, find_resources, prompt_categories
from bloom.support.schemas import JournalPrompt, ResourceType, SupportResource, WellnessTip

router = APIRouter(prefix="/support", tags=["Support"])


@router.get(
    "/prompts",
    response_model=List[JournalPrompt],
    summary="Journaling prompts",
    description="All prompts, or only those of one category (matched by name or id, case-insensitive).",
    responses={
        200: {"description": "Prompts returned."},
        404: {"description": "Unknown category."},
    },
)
def list_prompts_route(category: Optional[str] = None):
    prompts = find_prompts(category)
    if category and not prompts:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown category '{category}'. Available: {', '.join(prompt_categories())}",
        )
    return prompts


@router.get(
    "/resources",
    response_model=List[SupportResource],
    summary="Crisis and support lines",
    responses={200: {"description": "Resources matching the filters, possibly empty."}},
)
def list_resources_route(country: Optional[str] = None, type: Optional[ResourceType] = None):
    return find_resources(country=country, type=type)


@router.get("/tips", response_model=List[WellnessTip], summary="Coping tips")
def list_tips_route():
    return TIPS
