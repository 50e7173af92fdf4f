"""
Wind sway for the fractal tree.
Sway is a render-time rotation of each segment's end point about its start
point. One global phase (sin of the wind time) is shared by all segments and
scaled per segment so the trunk barely moves and the twigs move the most.
Stored segments are never modified.
"""
import math


def sway_angle(enabled, strength, wind_time, depth_left, total_depth):
    """Sway in degrees for a segment; 0 when wind is off."""
    if not enabled:
        return 0.0
    # 0 at the trunk base, approaching 1 at the twig tips
    leaf_factor = 1 - depth_left / total_depth
    return math.sin(wind_time) * (strength * leaf_factor)


def sway_endpoint(segment, angle_deg):
    """Return the end point of `segment` rotated by `angle_deg` about its start."""
    if angle_deg == 0:
        return segment.x2, segment.y2
    dx = segment.x2 - segment.x1
    dy = segment.y2 - segment.y1
    # y axis points down on the canvas
    base = math.atan2(-dy, dx)
    length = math.hypot(dx, dy)
    a = base + math.radians(angle_deg)
    return segment.x1 + length * math.cos(a), segment.y1 - length * math.sin(a)


def swayed_endpoints(segments, config, wind_time):
    for s in segments:
        angle = sway_angle(config.animate_wind, config.wind_strength, wind_time, s.depth_left, s.total_depth)
        yield sway_endpoint(s, angle)
