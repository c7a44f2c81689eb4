from question_pipeline.services.prompt_service import PromptService

__all__ = ["PromptService"]
