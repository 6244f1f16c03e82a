"""
Grocery Parser API - recipe URL to grocery ingredient list.
FastAPI service wrapping RecipeParsingPipeline for the shopping-list app.
"""

import logging
import time
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config.settings import get_settings
from .exceptions import FetchError, InvalidURLError, LLMAPIError, LLMParsingError
from .models.recipe import RecipeParsingResult
from .pipeline import RecipeParsingPipeline, build_pipeline
from .services.image_resolver import IngredientImageResolver

logger = logging.getLogger(__name__)


class ParseRecipeRequest(BaseModel):
    url: str


class IngredientImageResponse(BaseModel):
    name: str
    slug: str
    url: str


app = FastAPI(
    title="Grocery Parser API",
    description="Turn recipe pages into categorized grocery ingredient lists.",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_pipeline: Optional[RecipeParsingPipeline] = None
_image_resolver: Optional[IngredientImageResolver] = None


def get_pipeline() -> RecipeParsingPipeline:
    """Process-wide pipeline, built on first use"""
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline(get_settings())
    return _pipeline


def get_image_resolver() -> IngredientImageResolver:
    global _image_resolver
    if _image_resolver is None:
        settings = get_settings()
        _image_resolver = IngredientImageResolver(settings.ingredient_image_base_url)
        if settings.ingredient_alias_path:
            _image_resolver.load_aliases(settings.ingredient_alias_path)
    return _image_resolver


@app.get("/")
async def root():
    return {
        "service": "Grocery Parser API",
        "status": "healthy",
        "version": app.version,
        "endpoints": [
            "POST /parse-recipe",
            "GET /stats",
            "DELETE /stats",
            "DELETE /cache",
            "GET /ingredient-image",
            "GET /health"
        ]
    }


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.post("/parse-recipe", response_model=RecipeParsingResult)
async def parse_recipe(request: ParseRecipeRequest, pipeline: RecipeParsingPipeline = Depends(get_pipeline)):
    """
    Parse a recipe page into grocery ingredients.

    Input: {"url": "https://www.example.com/recipes/pasta"}
    Output: RecipeParsingResult; rejected LLM parses come back with success=false
    """
    start_time = time.time()
    try:
        result = await pipeline.parse_recipe(request.url)
    except InvalidURLError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (FetchError, LLMAPIError, LLMParsingError) as e:
        logger.warning(f"Parse failed for {request.url}: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    logger.info(f"Parsed {request.url} via {result.strategy} in {time.time() - start_time:.2f}s")
    return result


@app.get("/stats")
async def stats(pipeline: RecipeParsingPipeline = Depends(get_pipeline)):
    return pipeline.get_performance_stats().to_dict()


@app.delete("/stats")
async def reset_stats(pipeline: RecipeParsingPipeline = Depends(get_pipeline)):
    pipeline.reset_performance_stats()
    return {"reset": True}


@app.delete("/cache")
async def clear_cache(pipeline: RecipeParsingPipeline = Depends(get_pipeline)):
    pipeline.clear_cache()
    return {"cleared": True}


@app.get("/ingredient-image", response_model=IngredientImageResponse)
async def ingredient_image(name: str, resolver: IngredientImageResolver = Depends(get_image_resolver)):
    """Image slug and URL for an ingredient name"""
    if not name.strip():
        raise HTTPException(status_code=400, detail="Ingredient name is required")
    return IngredientImageResponse(name=name, slug=resolver.slug(name), url=resolver.resolve(name))
