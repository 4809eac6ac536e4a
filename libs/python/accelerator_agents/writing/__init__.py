from .agent import WritingAgent, build_system_prompt, build_user_prompt

__all__ = ["WritingAgent", "build_system_prompt", "build_user_prompt"]
