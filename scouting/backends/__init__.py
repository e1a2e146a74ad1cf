from scouting.backends.base import ErrorKind, GenerationResult, LLMBackend


def get_backend(provider: str) -> LLMBackend:
    """Factory function to create backend instance."""
    if provider == "groq":
        from scouting.backends.groq_backend import GroqBackend
        return GroqBackend()
    elif provider == "claude":
        from scouting.backends.claude_backend import ClaudeBackend
        return ClaudeBackend()
    else:
        raise ValueError(f"Unknown provider: {provider}. Available: ['groq', 'claude']")


__all__ = ["ErrorKind", "GenerationResult", "LLMBackend", "get_backend"]
