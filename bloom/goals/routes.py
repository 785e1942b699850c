from uuid import UUID
from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, Security
from sqlalchemy.orm import Session

from bloom.auth.service import get_current_user_id
from bloom.core.database import get_db
from bloom.core.events import ChangeFeed, get_change_feed
from bloom.goals.db import create_goal, get_user_goals, toggle_goal
from bloom.goals.schemas import GoalCreate, GoalResponse

router = APIRouter(prefix="/goals", tags=["Goals"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[GoalResponse],
    summary="List goals",
    description="All of the authenticated user's goals, newest first.",
    responses={
        200: {"description": "Goals retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to load goals."},
    },
)
def list_goals_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
):
    try:
        return get_user_goals(db, user_id)
    except Exception as e:
        logger.error(f"Error loading goals for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load goals")


@router.post(
    "",
    response_model=GoalResponse,
    status_code=201,
    summary="Create a goal",
    responses={
        201: {"description": "Goal created."},
        401: {"description": "Unauthorized."},
        422: {"description": "Blank title."},
        500: {"description": "Failed to create goal."},
    },
)
def create_goal_route(
    goal: GoalCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    feed: ChangeFeed = Depends(get_change_feed),
):
    try:
        created = create_goal(db, goal, user_id)
    except Exception as e:
        logger.error(f"Error creating goal for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create goal")

    feed.publish(user_id, "goals")
    return created


@router.patch(
    "/{goal_id}/toggle",
    response_model=GoalResponse,
    summary="Toggle a goal's completion",
    responses={
        200: {"description": "Goal updated."},
        401: {"description": "Unauthorized."},
        404: {"description": "Goal not found."},
        500: {"description": "Failed to update goal."},
    },
)
def toggle_goal_route(
    goal_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    feed: ChangeFeed = Depends(get_change_feed),
):
    try:
        goal = toggle_goal(db, goal_id, user_id)
    except Exception as e:
        logger.error(f"Error toggling goal {goal_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update goal")

    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")

    feed.publish(user_id, "goals")
    return goal
