from .advisor import TimingAdvice, build_timing_prompt, suggest_timing

__all__ = ["TimingAdvice", "build_timing_prompt", "suggest_timing"]
