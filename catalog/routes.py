"""
Catalog API routes — movies and actors.

Route prefixes: /movies, /actors
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_account_id
from catalog.schemas import (
    MIN_YEAR,
    ActorIn,
    ActorOut,
    CreatedResponse,
    MovieIn,
    MovieOut,
)
from database.models import Actor, Movie

logger = logging.getLogger(__name__)

movies_router = APIRouter(tags=["movies"])
actors_router = APIRouter(tags=["actors"])


def _actor_out(actor: Actor) -> Dict[str, Any]:
    return {
        "id": str(actor.id),
        "name": actor.name,
        "bio": actor.bio,
        "avatar": actor.avatar,
    }


def _movie_out(movie: Movie) -> Dict[str, Any]:
    return {
        "id": str(movie.id),
        "title": movie.title,
        "year": movie.year,
        "genres": list(movie.genres or []),
        "directors": list(movie.directors or []),
        "actors": list(movie.actors or []),
        "producer": movie.producer,
        "plot": movie.plot,
        "poster": movie.poster,
    }


def _movie_fields(req: MovieIn, actor_ids: List[uuid.UUID]) -> Dict[str, Any]:
    return {
        "title": req.title,
        "year": req.year,
        "genres": [g.value for g in req.genres],
        "directors": req.directors,
        "actors": [str(a) for a in actor_ids],
        "producer": req.producer,
        "plot": req.plot,
        "poster": str(req.poster) if req.poster else None,
    }


async def _get_or_404(session: AsyncSession, model, item_id: uuid.UUID, label: str):
    row = await session.get(model, item_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return row


async def _resolve_actor_ids(session: AsyncSession, raw_ids: List[str]) -> List[uuid.UUID]:
    """
    Parse and check every referenced actor before the movie write.

    Raises 400 for malformed ids and 404 if any actor is missing.
    """
    try:
        actor_ids = [uuid.UUID(a) for a in raw_ids]
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid actor id")

    unique_ids = set(actor_ids)
    result = await session.execute(select(Actor.id).where(Actor.id.in_(unique_ids)))
    found = set(result.scalars().all())
    if found != unique_ids:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Actor not found")
    return actor_ids


# ── Movies ─────────────────────────────────────────────────────────────


@movies_router.get("", response_model=List[MovieOut])
async def list_movies(session: AsyncSession = Depends(db_session)) -> List[Dict[str, Any]]:
    result = await session.execute(select(Movie).order_by(Movie.title))
    return [_movie_out(m) for m in result.scalars().all()]


@movies_router.get("/filter", response_model=List[MovieOut])
async def filter_movies(
    title: Optional[str] = Query(None, min_length=1),
    year: Optional[int] = Query(None, ge=MIN_YEAR),
    genre: Optional[str] = Query(None, min_length=1),
    director: Optional[str] = Query(None, min_length=1),
    actor: Optional[str] = Query(None, min_length=1),
    producer: Optional[str] = Query(None, min_length=1),
    session: AsyncSession = Depends(db_session),
) -> List[Dict[str, Any]]:
    """
    Filter movies.  ``title`` and ``producer`` match case-insensitive
    substrings; ``genre``, ``director`` and ``actor`` (an actor id) must
    appear in the movie's lists.
    """
    stmt = select(Movie)
    if title:
        stmt = stmt.where(Movie.title.ilike(f"%{title.strip()}%"))
    if year is not None:
        stmt = stmt.where(Movie.year == year)
    if producer:
        stmt = stmt.where(Movie.producer.ilike(f"%{producer.strip()}%"))
    result = await session.execute(stmt.order_by(Movie.title))

    # list columns are JSON, matched here to stay portable across backends
    movies = []
    for movie in result.scalars().all():
        if genre and genre.strip() not in (movie.genres or []):
            continue
        if director and director.strip() not in (movie.directors or []):
            continue
        if actor and actor.strip() not in (movie.actors or []):
            continue
        movies.append(_movie_out(movie))
    return movies


@movies_router.get("/{movie_id}", response_model=MovieOut)
async def get_movie(
    movie_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    return _movie_out(await _get_or_404(session, Movie, movie_id, "Movie"))


@movies_router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_movie(
    req: MovieIn,
    account_id: str = Depends(get_current_account_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    actor_ids = await _resolve_actor_ids(session, req.actors)
    movie = Movie(id=uuid.uuid4(), **_movie_fields(req, actor_ids))
    session.add(movie)
    await session.commit()
    logger.info("Movie %s created by account %s", movie.id, account_id)
    return {"message": "Movie created successfully", "id": str(movie.id)}


@movies_router.put("/{movie_id}", response_model=CreatedResponse)
async def update_movie(
    movie_id: uuid.UUID,
    req: MovieIn,
    account_id: str = Depends(get_current_account_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    movie = await _get_or_404(session, Movie, movie_id, "Movie")
    actor_ids = await _resolve_actor_ids(session, req.actors)
    for key, value in _movie_fields(req, actor_ids).items():
        setattr(movie, key, value)
    await session.commit()
    logger.info("Movie %s updated by account %s", movie.id, account_id)
    return {"message": "Movie updated successfully", "id": str(movie.id)}


@movies_router.delete("/{movie_id}")
async def delete_movie(
    movie_id: uuid.UUID,
    account_id: str = Depends(get_current_account_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    movie = await _get_or_404(session, Movie, movie_id, "Movie")
    await session.delete(movie)
    await session.commit()
    logger.info("Movie %s deleted by account %s", movie_id, account_id)
    return {"message": "Movie deleted successfully"}


# ── Actors ─────────────────────────────────────────────────────────────


@actors_router.get("", response_model=List[ActorOut])
async def list_actors(session: AsyncSession = Depends(db_session)) -> List[Dict[str, Any]]:
    result = await session.execute(select(Actor).order_by(Actor.name))
    return [_actor_out(a) for a in result.scalars().all()]


@actors_router.get("/{actor_id}", response_model=ActorOut)
async def get_actor(
    actor_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    return _actor_out(await _get_or_404(session, Actor, actor_id, "Actor"))


@actors_router.get("/{actor_id}/movies", response_model=List[MovieOut])
async def get_actor_movies(
    actor_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> List[Dict[str, Any]]:
    await _get_or_404(session, Actor, actor_id, "Actor")
    result = await session.execute(select(Movie).order_by(Movie.title))
    return [
        _movie_out(m)
        for m in result.scalars().all()
        if str(actor_id) in (m.actors or [])
    ]


@actors_router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_actor(
    req: ActorIn,
    account_id: str = Depends(get_current_account_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    actor = Actor(
        id=uuid.uuid4(),
        name=req.name,
        bio=req.bio,
        avatar=str(req.avatar) if req.avatar else None,
    )
    session.add(actor)
    await session.commit()
    logger.info("Actor %s created by account %s", actor.id, account_id)
    return {"message": "Actor created successfully", "id": str(actor.id)}


@actors_router.put("/{actor_id}", response_model=CreatedResponse)
async def update_actor(
    actor_id: uuid.UUID,
    req: ActorIn,
    account_id: str = Depends(get_current_account_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    actor = await _get_or_404(session, Actor, actor_id, "Actor")
    actor.name = req.name
    actor.bio = req.bio
    actor.avatar = str(req.avatar) if req.avatar else None
    await session.commit()
    logger.info("Actor %s updated by account %s", actor.id, account_id)
    return {"message": "Actor updated successfully", "id": str(actor.id)}


@actors_router.delete("/{actor_id}")
async def delete_actor(
    actor_id: uuid.UUID,
    account_id: str = Depends(get_current_account_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    actor = await _get_or_404(session, Actor, actor_id, "Actor")
    await session.delete(actor)
    await session.commit()
    logger.info("Actor %s deleted by account %s", actor_id, account_id)
    return {"message": "Actor deleted successfully"}
