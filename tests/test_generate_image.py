import pytest

from coloring.application.use_cases import asset_lookup
from coloring.application.use_cases.generate_image import (
    ColoringPageService,
    RATE_LIMIT_MESSAGE,
    build_coloring_prompt,
    validate_prompt,
)
from coloring.application.use_cases.rate_limiter import RateLimiter
from coloring.domain.errors import GenerationConfigError, GenerationFailed, PromptError, RateLimitExceeded
from conftest import FakeGenerator


@pytest.mark.parametrize("prompt, message", [
    (None, "Prompt is required"),
    ("", "Prompt is required"),
    (42, "Prompt must be a string"),
    ("   ", "Prompt cannot be empty"),
    ("x" * 501, "Prompt must be 500 characters or less"),
])
def test_validate_prompt_errors(prompt, message):
    with pytest.raises(PromptError) as exc:
        validate_prompt(prompt)
    assert exc.value.message == message
    assert exc.value.status == 400


def test_validate_prompt_trims():
    assert validate_prompt("  a friendly whale \n") == "a friendly whale"
    assert validate_prompt(" " + "x" * 500 + " ") == "x" * 500


def test_build_prompt_wraps_topic_in_coloring_style():
    prompt = build_coloring_prompt("a   happy\nwhale")

    assert "coloring book page illustration of: a happy whale." in prompt
    assert "thick black outlines" in prompt
    assert "Simple shapes suitable for young children" in prompt


def test_build_prompt_complexity_refinement():
    assert "Rich details" in build_coloring_prompt("whale", "detailed")
    assert "Simple shapes" in build_coloring_prompt("whale", "gigantic")
    assert "Simple shapes" in build_coloring_prompt("whale", None)


@pytest.mark.parametrize("topic, preset", [
    ("Dinosaur", "dinosaur"),
    ("a pink UNICORN with wings", "unicorn"),
    ("race car", "car"),
    ("sleepy cat", "cat"),
    ("a whale", None),
    ("", None),
])
def test_find_preset(topic, preset):
    assert asset_lookup.find_preset(topic) == preset


def test_asset_paths(tmp_path):
    assert asset_lookup.static_path("robot") == "coloring/assets/robot-little.png"
    assert asset_lookup.asset_file("robot", tmp_path) == tmp_path / "robot-little.png"


def _service(clock, generator, tmp_path, limit=10):
    return ColoringPageService(generator, RateLimiter(limit, 60, clock=clock), tmp_path)


def test_coloring_page_prefers_preset_and_skips_generator(clock, generator, tmp_path):
    service = _service(clock, generator, tmp_path, limit=0)

    page = service.coloring_page("1.2.3.4", "Castle in the sky")

    assert page["source"] == "asset"
    assert page["preset"] == "castle"
    assert page["file"] == tmp_path / "castle-little.png"
    assert generator.prompts == []


def test_coloring_page_generates_custom_topics(clock, generator, tmp_path):
    service = _service(clock, generator, tmp_path)

    page = service.coloring_page("1.2.3.4", "a whale", "medium")

    assert page == {"source": "generated", "image": generator.image}
    assert "a whale" in generator.prompts[0]
    assert "A few more details" in generator.prompts[0]


def test_generate_rate_limit(clock, generator, tmp_path):
    service = _service(clock, generator, tmp_path, limit=2)
    service.generate("ip", "whale")
    service.generate("ip", "shark")

    with pytest.raises(RateLimitExceeded) as exc:
        service.generate("ip", "octopus")

    assert exc.value.status == 429
    assert exc.value.message == RATE_LIMIT_MESSAGE
    assert exc.value.retry_after == 60
    assert len(generator.prompts) == 2


def test_invalid_prompts_still_count_against_the_limit(clock, generator, tmp_path):
    service = _service(clock, generator, tmp_path, limit=1)

    with pytest.raises(PromptError):
        service.generate("ip", "   ")
    with pytest.raises(RateLimitExceeded):
        service.generate("ip", "whale")


def test_generate_without_api_key(clock, tmp_path):
    generator = FakeGenerator("data:image/png;base64,AAAA", configured=False)
    service = _service(clock, generator, tmp_path)

    with pytest.raises(GenerationConfigError) as exc:
        service.generate("ip", "whale")

    assert exc.value.status == 500
    assert "OPENAI_API_KEY" in exc.value.message
    assert generator.prompts == []


def test_generator_failures_propagate(clock, tmp_path):
    generator = FakeGenerator(None, error=GenerationFailed("upstream exploded"))
    service = _service(clock, generator, tmp_path)

    with pytest.raises(GenerationFailed):
        service.generate("ip", "whale")
