from uuid import UUID, uuid4
from typing import List, Optional

from sqlalchemy.orm import Session
from bloom.goals.models import Goal
from bloom.goals.schemas import GoalCreate


def create_goal(db: Session, goal: GoalCreate, user_id: UUID) -> Goal:
    """
    Creates a new goal for the user.

    Args:
        db (Session): SQLAlchemy session.
        goal (GoalCreate): Input data for the goal.
        user_id (UUID): ID of the user.

    Returns:
        Goal: The created goal object.
    """
    new_goal = Goal(
        id=uuid4(),
        user_id=user_id,
        title=goal.title,
        description=goal.description or None,
        target_date=goal.target_date,
        completed=False,
    )
    db.add(new_goal)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(new_goal)
    return new_goal


def get_goal(db: Session, goal_id: UUID, user_id: UUID) -> Optional[Goal]:
    return db.query(Goal).filter(
        Goal.id == goal_id,
        Goal.user_id == user_id
    ).first()


def get_user_goals(db: Session, user_id: UUID) -> List[Goal]:
    """Retrieves all goals of a user, newest first."""
    return (
        db.query(Goal)
        .filter(Goal.user_id == user_id)
        .order_by(Goal.created_at.desc())
        .all()
    )


def set_goal_completed(db: Session, goal_id: UUID, user_id: UUID, completed: bool) -> Optional[Goal]:
    """
    Sets the completed flag of one goal.

    Returns:
        Optional[Goal]: Updated goal, or None if the user owns no such goal.
    """
    goal = get_goal(db, goal_id, user_id)
    if goal is None:
        return None
    goal.completed = completed
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(goal)
    return goal


def toggle_goal(db: Session, goal_id: UUID, user_id: UUID) -> Optional[Goal]:
    goal = get_goal(db, goal_id, user_id)
    if goal is None:
        return None
    return set_goal_completed(db, goal_id, user_id, not goal.completed)


def delete_all_goals(db: Session, user_id: UUID) -> int:
    """
    Deletes all goals associated with the user.

    ⚠️ Irreversible operation.
    """
    try:
        deleted = db.query(Goal).filter(
            Goal.user_id == user_id
        ).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return deleted
