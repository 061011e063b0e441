from typing import List

from fastapi import APIRouter, HTTPException

from ink_atlas.constants.catalog import get_city, list_cities
from ink_atlas.models.schemas import CityEntry, CitySummary

router = APIRouter(prefix="/cities", tags=["catalog"])


@router.get("", response_model=List[CitySummary])
async def get_cities():
    """Bundled offline cities"""
    return list_cities()


@router.get("/{city_key}", response_model=CityEntry)
async def get_city_entry(city_key: str):
    entry = get_city(city_key)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"City not in catalog: {city_key}")
    return entry
