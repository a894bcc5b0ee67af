"""
pokertable Agents - bot seats

BaseAgent is the interface every bot seat is driven through; BotAgent wraps
the difficulty-based decision policy.
"""

from pokertable.agents.base import BaseAgent
from pokertable.agents.bot import BotAgent, BotDecision, ScriptedRandom, decide

__all__ = ["BaseAgent", "BotAgent", "BotDecision", "ScriptedRandom", "decide"]
