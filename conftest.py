"""Global pytest configuration."""

import os

# Keep itinerary generation on the local fallback unless a test opts in
os.environ.setdefault("OPENAI_API_KEY", "")
