import threading

import pytest

from repro_rng import Generator, SeedLog, SeedProvider, seeding
from repro_rng.seedlog import SeedEvent, issued_seeds, read_events


class CountingEntropy:
    def __init__(self, value: int) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return self.value


def test_unbound_provider_seeds_default_generator_once():
    entropy = CountingEntropy(12345)
    provider = SeedProvider(entropy=entropy)
    assert not provider.bound
    seeds = [provider.get_random_seed() for _ in range(50)]
    reference = Generator(12345)
    assert seeds == [reference.get_uint32() for _ in range(50)]
    assert entropy.calls == 1
    assert all(0 <= s < 2**32 for s in seeds)


def test_zero_entropy_still_yields_explicit_seed():
    provider = SeedProvider(entropy=lambda: 0)
    assert provider.get_random_seed() == Generator(1).get_uint32()


def test_default_entropy_gives_distinct_seeds():
    provider = SeedProvider()
    seeds = {provider.get_random_seed() for _ in range(100)}
    assert len(seeds) > 90


def test_bound_provider_delegates():
    provider = SeedProvider(entropy=CountingEntropy(1))
    values = iter([10, 20, 30])
    provider.bind(lambda: next(values))
    assert provider.bound
    assert [provider.get_random_seed() for _ in range(3)] == [10, 20, 30]


def test_bind_happens_at_most_once():
    provider = SeedProvider()
    provider.bind(lambda: 1)
    with pytest.raises(RuntimeError):
        provider.bind(lambda: 2)
    assert provider.get_random_seed() == 1


def test_bind_rejects_non_callable():
    with pytest.raises(TypeError):
        SeedProvider().bind(42)


@pytest.mark.parametrize("bad", [-1, 2**32, "7", 1.0, True])
def test_bound_seeder_result_is_validated(bad):
    provider = SeedProvider()
    provider.bind(lambda: bad)
    with pytest.raises(ValueError):
        provider.get_random_seed()


def test_concurrent_first_use_is_race_free():
    entropy = CountingEntropy(999)
    provider = SeedProvider(entropy=entropy)
    barrier = threading.Barrier(8)
    results = []
    results_lock = threading.Lock()

    def worker():
        barrier.wait()
        local = [provider.get_random_seed() for _ in range(50)]
        with results_lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    reference = Generator(999)
    assert sorted(results) == sorted(reference.get_uint32() for _ in range(400))
    assert entropy.calls == 1


def test_seed_log_records_issued_seeds(tmp_path):
    log_path = tmp_path / "logs" / "seeds.jsonl"
    with SeedLog(log_path) as log:
        provider = SeedProvider(entropy=lambda: 77, seed_log=log)
        issued = [provider.get_random_seed() for _ in range(3)]
        provider.bind(lambda: 5)
        issued.append(provider.get_random_seed())

    events = read_events(log_path)
    assert events[0] == SeedEvent("default_generator", seed=77)
    seed_events = [e for e in events if e.event == "seed_issued"]
    assert [e.seed for e in seed_events] == issued
    assert issued_seeds(log_path) == issued
    assert [e.seq for e in seed_events] == [1, 2, 3, 4]
    assert [e.source for e in seed_events] == ["default"] * 3 + ["bound"]
    assert any(e.event == "seeder_bound" and e.seeder for e in events)


def test_seed_log_appends_across_sessions(tmp_path):
    path = tmp_path / "seeds.jsonl"
    for value in (1, 2):
        log = SeedLog(path)
        log.seed_issued(value, "bound", value)
        log.close()
    assert path.read_text().splitlines() == [
        '{"event":"seed_issued","seed":1,"seq":1,"source":"bound"}',
        '{"event":"seed_issued","seed":2,"seq":2,"source":"bound"}',
    ]


def test_process_wide_provider_and_override(monkeypatch, tmp_path):
    log_path = tmp_path / "process_seeds.jsonl"
    monkeypatch.setattr(seeding, "_default_provider", None)
    monkeypatch.setenv(seeding.SEED_LOG_ENV, str(log_path))

    provider = seeding.default_provider()
    assert seeding.default_provider() is provider

    rng = Generator()
    issued = [e for e in read_events(log_path) if e.event == "seed_issued"]
    assert issued[-1].seed == rng.seed
    assert issued[-1].source == "default"

    seeding.set_random_seeder(lambda: 31337)
    assert seeding.get_random_seed() == 31337
    assert Generator().seed == 31337
    with pytest.raises(RuntimeError):
        seeding.set_random_seeder(lambda: 1)
    provider._seed_log.close()


class FlakySeedLog(SeedLog):
    """Fails the first seed_issued write, then records normally."""

    def __init__(self, path) -> None:
        super().__init__(path)
        self.failures_left = 1

    def seed_issued(self, seed: int, source: str, seq: int) -> None:
        if self.failures_left:
            self.failures_left -= 1
            raise OSError("log volume full")
        super().seed_issued(seed, source, seq)


def test_failed_log_write_does_not_consume_a_seed(tmp_path):
    log = FlakySeedLog(tmp_path / "seeds.jsonl")
    provider = SeedProvider(entropy=lambda: 4321, seed_log=log)
    with pytest.raises(OSError, match="log volume full"):
        provider.get_random_seed()

    reference = Generator(4321)
    assert provider.get_random_seed() == reference.get_uint32()
    log.close()
    events = [e for e in read_events(tmp_path / "seeds.jsonl") if e.event == "seed_issued"]
    assert [e.seq for e in events] == [1]


def test_read_events_rejects_foreign_lines(tmp_path):
    path = tmp_path / "seeds.jsonl"
    path.write_text('{"event":"seed_issued","seed":1}\n{"tick":3}\n')
    with pytest.raises(ValueError):
        read_events(path)
