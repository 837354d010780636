"""Line-ending policies — models and registry."""

from eolguard.policy.models import EOLStyle, Policy
from eolguard.policy.registry import PolicyRegistry, build_registry

__all__ = ["EOLStyle", "Policy", "PolicyRegistry", "build_registry"]
