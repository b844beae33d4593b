import pytest

from bloomfilter.evaluation import (
    build_split,
    generate_synthetic_data,
    measure_collisions,
    measure_false_positive_rate,
    measure_membership,
    measure_performance,
    run_all,
    show_properties,
)


@pytest.fixture
def split():
    return build_split(generate_synthetic_data(2000))


def test_synthetic_data_is_unique_and_reproducible():
    items = generate_synthetic_data(500, seed=5)
    assert len(set(items)) == 500
    assert items == generate_synthetic_data(500, seed=5)
    assert items != generate_synthetic_data(500, seed=6)


def test_build_split(split):
    bloom, train, test = split
    assert len(train) == 1600
    assert len(test) == 400
    assert bloom.size >= 1
    assert bloom.bit_count() > 0


def test_checks(split, capsys):
    bloom, train, test = split

    assert measure_membership(bloom, train) == 0

    fpr = measure_false_positive_rate(bloom, train, test)
    assert fpr is not None
    assert fpr < 0.05

    rate = measure_collisions(bloom, train, test)
    assert rate is not None
    assert rate < 0.05

    show_properties(bloom, train)

    metrics = measure_performance(bloom, train, test, query_ops=1000)
    assert metrics["insert_count"] == len(train)
    assert metrics["query_count"] == 1000

    out = capsys.readouterr().out
    assert "Missing after insertion: 0" in out
    assert f"Number of hash functions: {bloom.num_hashes}" in out


def test_empty_held_out_set(capsys):
    bloom, train, _ = build_split(generate_synthetic_data(10))
    assert measure_false_positive_rate(bloom, train, []) is None
    assert measure_collisions(bloom, train, []) is None
    assert "No held-out items" in capsys.readouterr().out


def test_run_all(monkeypatch, capsys):
    import bloomfilter.evaluation as evaluation

    monkeypatch.setattr(
        evaluation, "generate_synthetic_data", lambda: generate_synthetic_data(500)
    )
    monkeypatch.setattr(
        evaluation,
        "measure_performance",
        lambda bloom, train, test: measure_performance(bloom, train, test, query_ops=200),
    )
    run_all()
    assert "Evaluation completed successfully!" in capsys.readouterr().out
