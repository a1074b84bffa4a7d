# mind_core/administrative/selectors.py
from __future__ import annotations

from typing import Any, Dict, List

from django.db.models import QuerySet
from django.utils import timezone

from mind_core.administrative.models import Menu, Notification


def pending_notifications() -> QuerySet[Notification]:
    """
    Unsent notifications that are due (scheduled at or before now), oldest first.
    """
    return (
        Notification.objects.select_related("notification_type", "user")
        .filter(sent=False, scheduled_at__lte=timezone.now())
        .order_by("scheduled_at")
    )


def notifications_for_user(*, user_id) -> QuerySet[Notification]:
    return (
        Notification.objects.select_related("notification_type")
        .filter(user_id=user_id)
        .order_by("-scheduled_at")
    )


def _menu_node(menu: Menu) -> Dict[str, Any]:
    return {
        "id": str(menu.id),
        "name": menu.name,
        "route": menu.route,
        "icon": menu.icon,
        "order": menu.order,
        "level": menu.level,
        "children": [],
    }


def menu_tree() -> List[Dict[str, Any]]:
    """
    Active menus nested under their parents. Children of an inactive parent
    are dropped along with it.
    """
    menus = list(Menu.objects.filter(is_active=True).order_by("order", "name"))
    nodes = {m.id: _menu_node(m) for m in menus}

    roots: List[Dict[str, Any]] = []
    for m in menus:
        node = nodes[m.id]
        if m.parent_id is None:
            roots.append(node)
        elif m.parent_id in nodes:
            nodes[m.parent_id]["children"].append(node)
    return roots
