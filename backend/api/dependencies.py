"""Shared dependencies for API routes."""

from fastapi import Request

from services.recommender import Recommender


def get_recommender(request: Request) -> Recommender:
    return request.app.state.recommender
