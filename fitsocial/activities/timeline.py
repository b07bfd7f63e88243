"""
时间线展示数据

在聚合查询结果的基础上补充配速、时长两个展示字段，前端直接渲染即可，不需要再做任何换算。
"""

from typing import List, Optional, Dict, Any

from sqlalchemy.orm import Session

from . import crud
from ..core.analytics.pace import format_pace, format_duration


def build_timeline_entry(item: Dict[str, Any]) -> Dict[str, Any]:
    """给单条聚合结果加上 pace 和 duration_text"""
    hours = item["duration_hours"]
    minutes = item["duration_minutes"]
    seconds = item["duration_seconds"]
    return {
        **item,
        "pace": format_pace(item["distance_miles"], hours, minutes, seconds),
        "duration_text": format_duration(hours, minutes, seconds),
    }


def get_timeline(db: Session, viewer_id: Optional[int] = None) -> List[Dict[str, Any]]:
    """全部用户的活动时间线（最新在前）"""
    return [build_timeline_entry(item) for item in crud.list_all_activities(db, viewer_id)]
