import os

from hypothesis import settings


def configure_hypo():
    settings.register_profile("fast", max_examples=10)
    settings.register_profile("slow", max_examples=500)
    settings.load_profile("slow" if os.environ.get("HYPO_SLOW") == "1" else "fast")
