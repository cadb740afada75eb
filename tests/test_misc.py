import pytest

from kestrelchess.misc import PRNG, HashTable, RunningAverage, mul_hi64, now, sigmoid


def test_prng_is_deterministic():
    a, b = PRNG(1070372), PRNG(1070372)
    assert [a.rand64() for _ in range(20)] == [b.rand64() for _ in range(20)]


def test_prng_values_fit_64_bits():
    rng = PRNG(728)
    values = [rng.rand64() for _ in range(200)]
    assert all(0 <= v < 2**64 for v in values)
    assert len(set(values)) == len(values)


def test_prng_different_seeds_differ():
    assert PRNG(1).rand64() != PRNG(2).rand64()


def test_prng_zero_seed_rejected():
    with pytest.raises(ValueError):
        PRNG(0)


def test_sparse_rand_has_few_bits():
    rng = PRNG(8977)
    total = sum(bin(rng.sparse_rand()).count("1") for _ in range(500))
    dense = PRNG(8977)
    dense_total = sum(bin(dense.rand64()).count("1") for _ in range(500))
    assert total < dense_total / 2


def test_running_average_set_and_value():
    avg = RunningAverage()
    avg.set(3, 1)
    assert avg.value() == 3
    assert avg.is_greater(2, 1)
    assert not avg.is_greater(3, 1)


def test_running_average_update_with_same_value_is_stable():
    avg = RunningAverage()
    avg.set(5, 1)
    for _ in range(10):
        avg.update(5)
    assert avg.value() == 5


def test_running_average_moves_toward_updates():
    avg = RunningAverage()
    avg.set(0, 1)
    for _ in range(50000):
        avg.update(10)
    assert avg.is_greater(9, 1)


def test_hash_table_maps_keys_by_low_bits():
    table = HashTable(dict, 8)
    entry = table[5]
    entry["k"] = 1
    assert table[5 + 8] is entry
    assert table[5 + (1 << 40)] is entry
    assert table[6] is not entry
    assert len(table) == 8


def test_hash_table_rejects_bad_size():
    with pytest.raises(ValueError):
        HashTable(dict, 6)


def test_sigmoid_centre_is_y0():
    assert sigmoid(50, 50, 7, 10, 100, 3) == 7


def test_sigmoid_is_odd_around_centre():
    for d in range(1, 40):
        up = sigmoid(50 + d, 50, 7, 10, 100, 3) - 7
        down = sigmoid(50 - d, 50, 7, 10, 100, 3) - 7
        assert up == -down


def test_sigmoid_is_increasing_and_bounded():
    values = [sigmoid(t, 0, 0, 5, 100, 1) for t in range(-1000, 1000, 10)]
    assert values == sorted(values)
    assert all(-100 <= v <= 100 for v in values)


def test_sigmoid_invalid_parameters():
    with pytest.raises(ValueError):
        sigmoid(1, 0, 0, 0, 1, 1)
    with pytest.raises(ValueError):
        sigmoid(1, 0, 0, 1, 1, 0)


def test_mul_hi64():
    assert mul_hi64(1 << 32, 1 << 32) == 1
    assert mul_hi64(12345, 1) == 0
    assert mul_hi64(2**64 - 1, 2**64 - 1) == 2**64 - 2


def test_now_is_monotonic():
    a = now()
    b = now()
    assert b >= a