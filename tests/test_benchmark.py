"""
Tests for the benchmark harness: known-answer verification, timing table,
config loading and the run_benchmark.py script.
"""

from pathlib import Path

import pandas as pd
import pytest

from eratosthenes import benchmark
from eratosthenes.benchmark import (
    DEFAULT_CONFIG,
    IMPLEMENTATIONS,
    KNOWN_COUNTS,
    KNOWN_LISTS,
    load_config,
    run_benchmark,
    verify_implementations,
)
import run_benchmark as script


REPO_ROOT = Path(__file__).parent.parent


class TestKnownAnswers:

    @pytest.mark.parametrize("name", [
        "numpy_sieve",
        "bit_sieve",
        pytest.param("list_sieve", marks=pytest.mark.slow),
        pytest.param("incremental_sieve", marks=pytest.mark.slow),
    ])
    def test_implementation_passes(self, name):
        assert verify_implementations([name], verbose=False) == []

    def test_known_lists_agree_with_counts(self):
        """The two reference tables must not contradict each other."""
        for bound, primes in KNOWN_LISTS.items():
            if bound in KNOWN_COUNTS:
                assert len(primes) == KNOWN_COUNTS[bound]

    def test_broken_implementation_is_reported(self, monkeypatch):
        def off_by_one(N):
            return [p for p in range(2, N) if all(p % d for d in range(2, p))]

        monkeypatch.setitem(IMPLEMENTATIONS, 'broken', off_by_one)
        failures = verify_implementations(['broken'], verbose=False)

        assert failures
        assert any("broken(2)" in msg for msg in failures)

    def test_verbose_output(self, capsys):
        verify_implementations(['numpy_sieve'], verbose=True)
        assert "Testing numpy_sieve... ok" in capsys.readouterr().out


class TestRunBenchmark:

    def test_table_shape(self):
        df = run_benchmark([100, 1_000], repeats=2, verbose=False)

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 2 * len(IMPLEMENTATIONS)
        assert list(df.columns) == ['implementation', 'bound', 'prime_count', 'repeats',
                                    'best_seconds', 'mean_seconds', 'relative']

    def test_prime_counts(self):
        df = run_benchmark([3_571], repeats=1, verbose=False)
        assert (df['prime_count'] == 500).all()

    def test_best_not_above_mean(self):
        df = run_benchmark([5_000], repeats=3, names=['numpy_sieve', 'list_sieve'],
                           verbose=False)
        assert (df['best_seconds'] <= df['mean_seconds'] + 1e-12).all()

    def test_fastest_is_relative_one(self):
        df = run_benchmark([20_000], repeats=1, names=["numpy_sieve", "bit_sieve"],
                           verbose=False)
        assert df['relative'].min() == pytest.approx(1.0)

    def test_time_implementation(self):
        best, mean, count = benchmark.time_implementation(benchmark.numpy_sieve, 100, 2)
        assert count == 25
        assert 0 <= best <= mean + 1e-12


class TestLoadConfig:

    def test_defaults(self):
        config = load_config()
        assert config['bench_inputs'] == DEFAULT_CONFIG['bench_inputs']
        assert config['repeats'] == 3
        assert config['output_dir'] == Path('data/results')
        assert config['implementations'] == list(IMPLEMENTATIONS)

    def test_defaults_are_copied(self):
        load_config()['bench_inputs'].append(7)
        assert 7 not in DEFAULT_CONFIG['bench_inputs']

    def test_shipped_config_loads(self):
        config = load_config(REPO_ROOT / 'config' / 'default.yaml')
        assert config['bench_inputs'] == [2, 500_000, 1_000_000]

    def test_yaml_overrides_defaults(self, tmp_path):
        path = tmp_path / 'custom.yaml'
        path.write_text("bench_inputs: [10, 100]\nrepeats: 1\n")

        config = load_config(path)

        assert config['bench_inputs'] == [10, 100]
        assert config['repeats'] == 1
        assert config['implementations'] == list(IMPLEMENTATIONS)

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_config(path)['repeats'] == 3

    @pytest.mark.parametrize("text, fragment", [
        ("repeats: 0\n", "repeats"),
        ("repeats: two\n", "repeats"),
        ("bench_inputs: []\n", "bench_inputs"),
        ("bench_inputs: [10, 2.5]\n", "bench_inputs"),
        ("implementations: [numpy_sieve, quantum_sieve]\n", "quantum_sieve"),
        ("seed: 42\n", "unknown keys"),
        ("- 1\n- 2\n", "mapping"),
        ("implementations: null\n", "implementations"),
        ("implementations: numpy_sieve\n", "implementations"),
        ("implementations: [[numpy_sieve]]\n", "implementations"),
        ("output_dir: null\n", "output_dir"),
        ("output_dir: [a, b]\n", "output_dir"),
    ])
    def test_rejects_bad_values(self, tmp_path, text, fragment):
        path = tmp_path / 'bad.yaml'
        path.write_text(text)

        with pytest.raises(ValueError, match=fragment):
            load_config(path)


class TestScript:

    def test_runs_and_saves(self, tmp_path, capsys):
        path = tmp_path / 'quick.yaml'
        out_dir = tmp_path / 'results'
        path.write_text(
            "bench_inputs: [1000]\n"
            "repeats: 1\n"
            f"output_dir: {out_dir.as_posix()}\n"
            "implementations: [numpy_sieve, bit_sieve]\n"
        )

        code = script.main(['--config', str(path), '--save'])
        out = capsys.readouterr().out

        assert code == 0
        assert "All implementations agree" in out
        df = pd.read_csv(out_dir / 'benchmark.csv')
        assert set(df['implementation']) == {'numpy_sieve', 'bit_sieve'}
        assert (df['prime_count'] == 168).all()

    def test_verification_failure_exits_1(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / 'quick.yaml'
        path.write_text("bench_inputs: [10]\nrepeats: 1\n")
        monkeypatch.setattr(script, 'verify_implementations',
                            lambda names: ["numpy_sieve(2) found 0 primes, expected 1"])

        code = script.main(['--config', str(path)])

        assert code == 1
        assert "1 verification failures" in capsys.readouterr().out

    def test_skip_verify(self, tmp_path, capsys):
        path = tmp_path / 'quick.yaml'
        path.write_text("bench_inputs: [10]\nrepeats: 1\n")

        code = script.main(['--config', str(path), '--skip-verify'])

        assert code == 0
        assert "Known-answer verification" not in capsys.readouterr().out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
