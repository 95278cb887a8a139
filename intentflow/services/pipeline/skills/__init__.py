from .base_skill import BaseSkill, TopicSkill

__all__ = ["BaseSkill", "TopicSkill"]
