from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .errors import CharacterNotFound
from .models import CharacterPage, CharacterRecord, DictionaryEntry, WordDecomposition
from .service import KnowledgeBase


def get_kb(request: Request) -> KnowledgeBase:
    kb = getattr(request.app.state, "kb", None)
    if kb is None:
        raise HTTPException(503, detail="knowledge base not loaded")
    return kb


def create_app(kb: Optional[KnowledgeBase] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the app. With no `kb`, the knowledge base is loaded from `settings`
    (or the environment) at startup; routes are only reachable once that
    finishes, and a failed load stops startup.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "kb", None) is None:
            app.state.kb = KnowledgeBase.load(settings)
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.kb = kb

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health(request: Request):
        kb = getattr(request.app.state, "kb", None)
        return {
            "ok": kb is not None,
            "data_dir": str(settings.data_dir),
            "characters": len(kb.characters) if kb else 0,
            "dictionary_entries": len(kb.dictionary) if kb else 0,
        }

    @app.get(
        "/character/page/{page}/take/{take}",
        response_model=CharacterPage,
        response_model_exclude_none=True,
    )
    def list_characters(page: int, take: int, kb: KnowledgeBase = Depends(get_kb)):
        try:
            return kb.get_characters(page, take)
        except ValueError as e:
            raise HTTPException(400, detail=str(e))

    @app.get(
        "/character/{character}",
        response_model=CharacterRecord,
        response_model_exclude_none=True,
    )
    def get_character(character: str, kb: KnowledgeBase = Depends(get_kb)):
        try:
            return kb.get_character(character)
        except CharacterNotFound:
            raise HTTPException(404, detail=f"character not found: {character}")

    @app.get("/dictionary/{word}", response_model=DictionaryEntry)
    def get_dictionary_entry(word: str, kb: KnowledgeBase = Depends(get_kb)):
        entry = kb.get_dictionary_entry(word)
        if entry is None:
            raise HTTPException(404, detail=f"word not found: {word}")
        return entry

    @app.get(
        "/decomposition/{word}",
        response_model=WordDecomposition,
        response_model_exclude_none=True,
    )
    def decompose(word: str, kb: KnowledgeBase = Depends(get_kb)):
        return kb.decompose(word)

    @app.get("/recommended-search-terms", response_model=List[str])
    def recommended_search_terms(kb: KnowledgeBase = Depends(get_kb)):
        return list(kb.get_recommended_terms())

    @app.get("/recommended-search-terms/random")
    def random_search_term(kb: KnowledgeBase = Depends(get_kb)):
        term = kb.random_recommended_term()
        if term is None:
            raise HTTPException(404, detail="no recommended search terms")
        return {"term": term}

    return app


def create_app_from_env() -> FastAPI:
    """Entry point for uvicorn: `uvicorn --factory hanzi_kb.main:create_app_from_env`."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    return create_app(settings=settings)
