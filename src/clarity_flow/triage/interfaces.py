"""Abstract interfaces for the task triage system."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from clarity_flow.triage.models import (
    AnalysisResult,
    ProductivityInsights,
    ProviderCredential,
    Quadrant,
    Task,
)


class ProviderConfigStore(ABC):
    """Abstract interface for the persisted provider-config store."""

    @abstractmethod
    async def load_provider_configs(self) -> list[ProviderCredential]:
        """
        Load all persisted provider credential records.

        Returns:
            List of ProviderCredential records, possibly empty

        Raises:
            ConfigStoreError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def save_provider_configs(self, configs: Sequence[ProviderCredential]) -> None:
        """
        Persist the complete list of provider credential records.

        The whole list is written back; concurrent writers follow
        last-writer-wins semantics.

        Args:
            configs: Records to persist

        Raises:
            ConfigStoreError: If the store cannot be written
        """
        pass


class TriageService(ABC):
    """Abstract interface for the task triage engine."""

    @abstractmethod
    async def analyze(self, text: str) -> AnalysisResult:
        """
        Classify free-text task input into an Eisenhower quadrant.

        This method checks connectivity, feature flag and credentials, selects
        the primary provider, builds a prompt in the detected language, calls
        the provider and validates its answer.

        Args:
            text: Raw task description

        Returns:
            AnalysisResult with quadrant, confidence, reasoning and metadata

        Raises:
            OfflineError: If the host reports no connectivity
            AIDisabledError: If AI features are turned off
            NoAIAPIError: If no provider has a usable credential
            NoValidProviderError: If provider selection yields nothing
            AIFailedError: If the provider call or response validation fails
        """
        pass

    @abstractmethod
    def create_manual_result(
        self,
        text: str,
        quadrant: Quadrant | str,
        estimated_time: int | None = None,
        due_date: datetime | None = None,
        tags: list[str] | None = None,
    ) -> AnalysisResult:
        """
        Build a result from an explicit user-selected quadrant.

        This path never touches the network and always succeeds for a valid
        quadrant.

        Args:
            text: Raw task description
            quadrant: Quadrant chosen by the user
            estimated_time: Optional estimate in minutes
            due_date: Optional due date
            tags: Optional tags

        Returns:
            AnalysisResult with confidence 1.0
        """
        pass

    @abstractmethod
    async def is_ai_enabled(self) -> bool:
        """
        Check whether any provider has a usable credential.

        Returns:
            True if automated analysis could run
        """
        pass

    @abstractmethod
    def get_productivity_insights(self, tasks: Sequence[Task]) -> ProductivityInsights:
        """
        Compute insights and recommendations over a task collection.

        Args:
            tasks: Tasks to analyze

        Returns:
            ProductivityInsights
        """
        pass
