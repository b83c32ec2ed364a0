"""Tests for cached exercise lookup."""

from labcheck.core.utils.caching import ExpiringCache
from labcheck.exercises.repository import ExerciseRepository
from labcheck.exercises.sources import InMemoryExerciseSource


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class CountingSource(InMemoryExerciseSource):
    def __init__(self, definitions=()):
        super().__init__(definitions)
        self.lookups = 0

    def get_definition(self, exercise_id):
        self.lookups += 1
        return super().get_definition(exercise_id)


def make_repository(clock: FakeClock, ttl: float = 60) -> tuple[ExerciseRepository, CountingSource]:
    source = CountingSource([{"id": "ex-1", "successMessage": "v1"}])
    return ExerciseRepository(source, ExpiringCache(maxsize=16, ttl=ttl, timer=clock)), source


class TestExerciseRepository:
    def test_hydrates_once_within_ttl(self) -> None:
        clock = FakeClock()
        repository, source = make_repository(clock)

        first = repository.get_exercise("ex-1")
        clock.now = 59
        second = repository.get_exercise("ex-1")

        assert first is second
        assert source.lookups == 1

    def test_rereads_after_ttl(self) -> None:
        clock = FakeClock()
        repository, source = make_repository(clock)

        repository.get_exercise("ex-1")
        source.add({"id": "ex-1", "successMessage": "v2"})
        clock.now = 61

        assert repository.get_exercise("ex-1").success_message == "v2"
        assert source.lookups == 2

    def test_unknown_ids_are_not_cached(self) -> None:
        clock = FakeClock()
        repository, source = make_repository(clock)

        assert repository.get_exercise("later") is None
        source.add({"id": "later", "successMessage": "ok"})

        assert repository.get_exercise("later") is not None

    def test_invalidate_one(self) -> None:
        clock = FakeClock()
        repository, source = make_repository(clock)

        repository.get_exercise("ex-1")
        source.add({"id": "ex-1", "successMessage": "v2"})
        repository.invalidate("ex-1")

        assert repository.get_exercise("ex-1").success_message == "v2"

    def test_invalidate_all(self) -> None:
        clock = FakeClock()
        repository, _source = make_repository(clock)

        repository.get_exercise("ex-1")
        repository.invalidate()

        assert repository.cache.size() == 0

    def test_disabled_cache_hydrates_every_time(self) -> None:
        source = CountingSource([{"id": "ex-1", "successMessage": "ok"}])
        repository = ExerciseRepository(source, ExpiringCache(enabled=False))

        repository.get_exercise("ex-1")
        repository.get_exercise("ex-1")

        assert source.lookups == 2

    def test_list_ids(self) -> None:
        repository, _source = make_repository(FakeClock())
        assert repository.list_ids() == ["ex-1"]
