# Copyright (c) Syntropy Systems
"""FastAPI application for the potionlab HTTP API."""

import logging
from pathlib import Path
from threading import Lock
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import Response

import potionlab
from potionlab.config import find_project_dir, load_config
from potionlab.engine import ResearchEngine
from potionlab.errors import (
    BackupImportError,
    DomainError,
    TrialNotFoundError,
    ValidationError,
)
from potionlab.matrix import CrossSection, MatrixPolicy
from potionlab.models.trial import Combo, TrialState
from potionlab.recommend import Recommendation, Selection
from potionlab.store import open_engine

from .models import (
    BackupPayload,
    CandidatesResponse,
    DomainResponse,
    HealthResponse,
    TrialCreate,
    TrialResolve,
    TrialResponse,
    UntestedResponse,
)

logger = logging.getLogger(__name__)


def get_engine(request: Request) -> ResearchEngine:
    """Get the engine bound to this app."""
    return request.app.state.engine


def get_lock(request: Request) -> Lock:
    """Get the lock held around every engine access, reads included."""
    return request.app.state.write_lock


def create_app(
    project_dir: Optional[Path] = None,
    engine: Optional[ResearchEngine] = None,
    policy: Optional[MatrixPolicy] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        project_dir: .potionlab directory to load (and autosave to)
        engine: Pre-built engine, used instead of project_dir (for testing)
        policy: Matrix policy; read from the project config when omitted

    Returns:
        Configured FastAPI application
    """
    if engine is None:
        if project_dir is None:
            project_dir = find_project_dir()
        if project_dir is None:
            raise ValueError("No project directory provided")
        engine = open_engine(project_dir)
        if policy is None:
            policy = load_config(project_dir).matrix_policy()

    app = FastAPI(
        title="potionlab",
        description="Recipe discovery helper API",
        version=potionlab.__version__,
    )
    app.state.engine = engine
    app.state.write_lock = Lock()
    app.state.policy = policy or MatrixPolicy()

    # --- Read Endpoints ---

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        """Health check endpoint."""
        return HealthResponse(version=potionlab.__version__)

    @app.get("/api/domain", response_model=DomainResponse)
    def get_domain(engine: ResearchEngine = Depends(get_engine)):
        """The value lists in display order."""
        domain = engine.domain
        return DomainResponse(
            a=domain.a, b=domain.b, c=domain.c, names=domain.names, size=domain.size()
        )

    @app.get("/api/state", response_model=TrialState)
    def get_state(
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """The whole trial log in its persisted shape."""
        with lock:
            return engine.serialize()

    @app.get("/api/candidates", response_model=CandidatesResponse)
    def list_candidates(
        limit: Optional[int] = Query(None, ge=1),
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Combos that could still be undiscovered recipes."""
        with lock:
            candidates = engine.candidates
        shown = candidates[:limit] if limit else candidates
        return CandidatesResponse(
            count=len(candidates), total=engine.domain.size(), combos=shown
        )

    @app.get("/api/recommend", response_model=Recommendation)
    def get_recommendation(
        a: Optional[str] = Query(None),
        b: Optional[str] = Query(None),
        c: Optional[str] = Query(None),
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Suggested values for the unpinned dimensions."""
        selection = Selection(a=a, b=b, c=c)
        try:
            for dimension, value in selection.pinned().items():
                engine.domain.require_value(dimension, value)
        except DomainError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        with lock:
            return engine.recommend(selection)

    @app.get("/api/matrix/{b}", response_model=CrossSection)
    def get_matrix(
        b: str,
        request: Request,
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Cross-section of the trial log for one B value."""
        try:
            with lock:
                return engine.matrix(b, request.app.state.policy)
        except DomainError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e

    @app.get("/api/untested", response_model=UntestedResponse)
    def get_untested(
        focus: Optional[str] = Query(None),
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """(A, C) pairs not touched by any trial."""
        try:
            with lock:
                pairs = engine.untested(focus)
        except DomainError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        return UntestedResponse(focus=focus, pairs=pairs)

    @app.get("/api/export")
    def export_backup(
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Backup text for the whole trial log."""
        with lock:
            text = engine.export_backup()
        return Response(content=text, media_type="application/json")

    # --- Mutation Endpoints ---

    @app.post("/api/trials", response_model=TrialResponse, status_code=201)
    def create_trial(
        request: TrialCreate,
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Record a trial outcome."""
        combo = Combo(a=request.a, b=request.b, c=request.c)
        with lock:
            try:
                trial = engine.commit(request.kind, combo, request.label)
            except ValidationError as e:
                raise HTTPException(status_code=422, detail=str(e)) from e
            return TrialResponse(trial=trial, remaining=len(engine.candidates))

    @app.post("/api/trials/{trial_id}/resolve", response_model=TrialResponse)
    def resolve_trial(
        trial_id: str,
        request: TrialResolve,
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Resolve a pending trial into an outcome."""
        with lock:
            try:
                trial = engine.resolve(trial_id, request.kind, request.label)
            except TrialNotFoundError as e:
                raise HTTPException(status_code=404, detail=str(e)) from e
            except ValidationError as e:
                raise HTTPException(status_code=422, detail=str(e)) from e
            return TrialResponse(trial=trial, remaining=len(engine.candidates))

    @app.delete("/api/trials/{trial_id}", response_model=TrialResponse)
    def delete_trial(
        trial_id: str,
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Delete a trial and rebuild the candidate set."""
        with lock:
            try:
                trial = engine.remove(trial_id)
            except TrialNotFoundError as e:
                raise HTTPException(status_code=404, detail=str(e)) from e
            return TrialResponse(trial=trial, remaining=len(engine.candidates))

    @app.post("/api/import", response_model=TrialState)
    def import_backup(
        payload: BackupPayload,
        engine: ResearchEngine = Depends(get_engine),
        lock: Lock = Depends(get_lock),
    ):
        """Replace the trial log with a backup; nothing changes on error."""
        with lock:
            try:
                engine.import_backup(payload.text)
            except BackupImportError as e:
                raise HTTPException(status_code=400, detail=str(e)) from e
            logger.info("Backup imported over HTTP")
            return engine.serialize()

    return app
