"""
Main Demo Module

This is the entry point for the Network Demo.
Runs the complete walkthrough:

1. Fetch posts with the basic transport
2. Store a demo token (simulated login)
3. With the configured API client:
   a. Fetch all users
   b. Fetch a single user
   c. Fetch the posts of that user
4. Toggle the persisted theme preference
5. Report results

Every step is isolated: a failing step is logged with its classified
message and the walkthrough moves on.
"""

import logging
import sys
import time
from typing import Callable, List, Optional
from dataclasses import dataclass

from .config import config, APIConfig
from .api import APIClient, ClassifiedError, fetch_posts_basic
from .storage import PreferenceStore, TokenStore, ThemePreference


# Configure logging
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging for the application."""
    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("network_demo")
    logger.setLevel(logging.DEBUG)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    ))

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='w',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(config.log.log_format))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


@dataclass
class StepResult:
    """Result of a single demo step."""
    name: str
    success: bool
    detail: Optional[str]
    error: Optional[str]
    duration_seconds: float


@dataclass
class DemoResult:
    """Result of the complete demo run."""
    success: bool
    steps: List[StepResult]
    total_duration_seconds: float

    @property
    def failed_steps(self) -> List[StepResult]:
        return [step for step in self.steps if not step.success]


class NetworkDemo:
    """
    Walks through both HTTP styles and the preference store.
    """

    def __init__(
        self,
        api_config: Optional[APIConfig] = None,
        preferences: Optional[PreferenceStore] = None,
        api: Optional[APIClient] = None,
        sample_user_id: int = 1,
    ):
        """Initialize the demo and its components."""
        self.logger = logging.getLogger("network_demo.main")
        self.api_config = api_config or config.api
        self.preferences = preferences or PreferenceStore(config.storage.preferences_path)
        self.theme = ThemePreference(self.preferences, key=config.storage.theme_key)
        if api is not None:
            # The demo token must land where the client's AuthStage reads it
            self.api = api
            self.tokens = api.token_store
        else:
            self.tokens = TokenStore(self.preferences, key=config.storage.token_key)
            self.api = APIClient(self.api_config, self.tokens)
        self.sample_user_id = sample_user_id

        self.logger.info("NetworkDemo initialized")

    def run(self) -> DemoResult:
        """
        Execute the complete walkthrough.

        Returns:
            DemoResult with details of every step.
        """
        start_time = time.time()

        self.logger.info("=" * 60)
        self.logger.info("Starting Network Demo")
        self.logger.info("=" * 60)

        steps = [
            ("Fetch posts (basic transport)", self._fetch_posts_basic),
            ("Save demo token", self._save_demo_token),
            ("Fetch users (API client)", self._fetch_users),
            (f"Fetch user {self.sample_user_id}", self._fetch_user),
            (f"Fetch posts of user {self.sample_user_id}", self._fetch_user_posts),
            ("Toggle theme", self._toggle_theme),
        ]

        results = [self._run_step(name, action) for name, action in steps]

        failed = sum(1 for r in results if not r.success)
        total_duration = time.time() - start_time

        self.logger.info("=" * 60)
        self.logger.info("Demo Complete")
        self.logger.info(f"Steps: {len(results)}")
        self.logger.info(f"Failed: {failed}")
        self.logger.info(f"Duration: {total_duration:.1f}s")
        self.logger.info("=" * 60)

        return DemoResult(
            success=failed == 0,
            steps=results,
            total_duration_seconds=total_duration
        )

    def _run_step(self, name: str, action: Callable[[], str]) -> StepResult:
        """
        Run one step, converting failures into a StepResult.

        ClassifiedError messages are shown as-is; anything else is
        logged with its traceback.
        """
        self.logger.info("-" * 40)
        self.logger.info(name)
        start_time = time.time()

        try:
            detail = action()
        except ClassifiedError as e:
            self.logger.error(f"{name} failed [{e.category.value}]: {e.message}")
            return StepResult(name, False, None, e.message, time.time() - start_time)
        except Exception as e:
            self.logger.exception(f"Error in step '{name}'")
            return StepResult(name, False, None, str(e), time.time() - start_time)

        self.logger.info(f"  {detail}")
        return StepResult(name, True, detail, None, time.time() - start_time)

    def _fetch_posts_basic(self) -> str:
        url = f"{self.api_config.base_url}{self.api_config.posts_endpoint}"
        posts = fetch_posts_basic(url, timeout=self.api_config.timeout_seconds)
        return f"{len(posts)} posts fetched"

    def _save_demo_token(self) -> str:
        if not self.tokens.save_demo_token():
            raise RuntimeError("Demo token could not be saved")
        return "Token stored"

    def _fetch_users(self) -> str:
        users = self.api.fetch_users()
        return f"{len(users)} users fetched"

    def _fetch_user(self) -> str:
        user = self.api.get_user(self.sample_user_id)
        return f"{user.name} <{user.email}>"

    def _fetch_user_posts(self) -> str:
        posts = self.api.get_posts_by_user(self.sample_user_id)
        return f"{len(posts)} posts by user {self.sample_user_id}"

    def _toggle_theme(self) -> str:
        is_dark_mode = self.theme.toggle()
        return f"{'Dark' if is_dark_mode else 'Light'} mode enabled"


def main():
    """Main entry point for the demo."""
    # Set up logging
    logger = setup_logging(config.log.log_level)

    try:
        demo = NetworkDemo()
        try:
            result = demo.run()
        finally:
            demo.api.close()

        # Exit with appropriate code
        if result.success:
            logger.info("Demo completed successfully!")
            sys.exit(0)
        else:
            logger.error("Demo completed with failures")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Demo interrupted by user")
        sys.exit(130)

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
