"""Thread safety tests.

attributed() keeps all state call-local and reads configuration from a
ContextVar, so concurrent calls with different inputs and configs must not
interfere with each other.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

from tagstring import BuildConfig, TagString, attributed, attributed_or_none, build_config_context

ATTRIBUTES = {"b": {"weight": "bold"}, "c": {"color": "red"}}


class TestConcurrentBuilds:
    """Many threads building at once."""

    def test_concurrent_results_are_independent(self) -> None:
        def work(i: int) -> tuple[int, str, list[dict]]:
            source = f"{i} <b>{i}<c>{i}</c></b>"
            styled = attributed(source, ATTRIBUTES)
            return i, styled.text, [dict(run.attributes) for run in styled]

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(work, i) for i in range(200)]
            for future in as_completed(futures):
                i, text, attrs = future.result()
                assert text == f"{i} {i}{i}"
                assert attrs == [{}, {"weight": "bold"}, {"weight": "bold", "color": "red"}]

    def test_concurrent_configs_do_not_leak(self) -> None:
        def work(i: int) -> bool:
            lenient = i % 2 == 0
            with build_config_context(BuildConfig(require_closed_tags=not lenient)):
                result = attributed_or_none("<b>open", ATTRIBUTES)
            return (result is not None) == lenient

        with ThreadPoolExecutor(max_workers=8) as pool:
            assert all(pool.map(work, range(100)))

    def test_shared_tagstring(self) -> None:
        markup = TagString("<b>shared</b>")

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: markup.attributed(ATTRIBUTES), range(50)))

        assert all(r == results[0] for r in results)
