from __future__ import annotations

import importlib.metadata
import os

# stamped into the container environment at build time
BUILD_TIME = os.getenv("BUILD_TIME", "unknown")
GIT_COMMIT = os.getenv("GIT_COMMIT", "unknown")
GIT_BRANCH = os.getenv("GIT_BRANCH", "unknown")


def get_version() -> str:
	try:
		return importlib.metadata.version("receipt-points")
	except importlib.metadata.PackageNotFoundError:
		return "unknown"


def get_version_info() -> dict[str, str]:
	return {
		"version": get_version(),
		"build_time": BUILD_TIME,
		"git_commit": GIT_COMMIT[:12],
		"git_branch": GIT_BRANCH,
	}
