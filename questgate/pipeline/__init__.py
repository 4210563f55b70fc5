from .orchestrator import QuestSubmissionPipeline

__all__ = ["QuestSubmissionPipeline"]
