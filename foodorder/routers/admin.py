# foodorder/routers/admin.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from foodorder.core.auth import require_admin
from foodorder.database import get_session
from foodorder.models.user import User
from foodorder.repositories.order_repo import OrderRepository
from foodorder.repositories.stats_repo import StatsRepository
from foodorder.repositories.user_repo import UserRepository
from foodorder.schemas.common import MessageResponse
from foodorder.schemas.order import (
    OrderListResponse,
    OrderStatusResponse,
    OrderStatusUpdate,
)
from foodorder.schemas.stats import StatsResponse
from foodorder.schemas.user import (
    StaffListResponse,
    UserListResponse,
    UserRoleResponse,
    UserRoleUpdate,
)
from foodorder.services.order_service import OrderService
from foodorder.services.stats_service import StatsService
from foodorder.services.user_service import UserService

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

stats_service = StatsService(StatsRepository())
user_service = UserService(UserRepository())
order_service = OrderService(OrderRepository())


# -------- Dashboard --------


@router.get("/stats", response_model=StatsResponse)
def get_stats(session: Session = Depends(get_session)):
    """
    Aggregated statistics for the admin dashboard.

    Order counts by status, completed revenue and the trailing
    7-day revenue / order series (UTC days, oldest first).
    """
    return StatsResponse(stats=stats_service.compute_stats(session))


# -------- Users --------


@router.get("/users", response_model=UserListResponse)
def get_all_users(session: Session = Depends(get_session)):
    return UserListResponse(users=user_service.list_users(session))


@router.get("/staff", response_model=StaffListResponse)
def get_staff_members(session: Session = Depends(get_session)):
    """Staff directory sorted by name."""
    return StaffListResponse(staff=user_service.list_staff(session))


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(user_id: uuid.UUID, session: Session = Depends(get_session)):
    user_service.delete_user(session, user_id)
    return MessageResponse(message="User deleted successfully")


@router.patch("/users/{user_id}/role", response_model=UserRoleResponse)
def update_user_role(
    user_id: uuid.UUID,
    payload: UserRoleUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    Update a user's role.

    Allowed roles: user, staff, admin. Admins cannot change their own role.
    """
    user = user_service.update_role(session, current_user, user_id, payload.role)
    return UserRoleResponse(message="User role updated successfully", user=user)


# -------- Orders --------


@router.get("/orders", response_model=OrderListResponse)
def get_all_orders(session: Session = Depends(get_session)):
    """All orders, newest first."""
    return OrderListResponse(orders=order_service.list_all_orders(session))


@router.patch("/orders/{order_id}/status", response_model=OrderStatusResponse)
def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Set order status to one of: pending, completed, cancelled.
    """
    order = order_service.update_status(session, order_id, payload.status)
    return OrderStatusResponse(message="Order status updated successfully", order=order)


@router.delete("/orders/{order_id}", response_model=MessageResponse)
def delete_order(order_id: uuid.UUID, session: Session = Depends(get_session)):
    order_service.delete_order(session, order_id)
    return MessageResponse(message="Order deleted successfully")
