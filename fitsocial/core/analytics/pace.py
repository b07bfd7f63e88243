"""跑步/步行配速计算

说明：
- 配速（pace）是展示用的派生指标，单位为 分钟:秒/英里，不入库
- 计算公式：总分钟数 = 时*60 + 分 + 秒/60；配速 = 总分钟数 / 距离
- 展示为 floor(配速):round(小数部分*60)，秒数按"四舍五入"取整（0.5 向上）并补零到两位
- 秒数不向分钟进位，小数部分接近1时结果为 "5:60/mi"
"""

from typing import Optional
import math


def total_duration_minutes(hours: int, minutes: int, seconds: int) -> float:
    """把时/分/秒换算成总分钟数（小数）"""
    return hours * 60 + minutes + seconds / 60


def calculate_pace_minutes(
    distance_miles: float,
    hours: int,
    minutes: int,
    seconds: int,
) -> Optional[float]:
    """
    计算每英里所需分钟数（小数）

    参数：
        distance_miles: 距离（英里），必须大于0
        hours / minutes / seconds: 时长

    返回：
        分钟/英里；距离不大于0或时长为0时返回None
    """
    if distance_miles is None or distance_miles <= 0:
        return None
    total_minutes = total_duration_minutes(hours, minutes, seconds)
    if total_minutes <= 0:
        return None
    return total_minutes / distance_miles


def format_pace(
    distance_miles: float,
    hours: int,
    minutes: int,
    seconds: int,
) -> Optional[str]:
    """
    生成配速展示字符串

    例如 5.25 英里、30分45秒：30.75 / 5.25 = 5.857... -> "5:51/mi"

    返回：
        "分:秒/mi"，秒补零到两位；输入不合法时返回None
    """
    pace_minutes = calculate_pace_minutes(distance_miles, hours, minutes, seconds)
    if pace_minutes is None:
        return None

    whole_minutes = math.floor(pace_minutes)
    pace_seconds = math.floor((pace_minutes - whole_minutes) * 60 + 0.5)
    return f"{whole_minutes}:{pace_seconds:02d}/mi"


def format_duration(hours: int, minutes: int, seconds: int) -> str:
    """时长展示：跳过为0的部分，如 "1h 5m 3s"、"30m 45s"；全部为0时返回 "0s" """
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0:
        parts.append(f"{seconds}s")
    return " ".join(parts) or "0s"
