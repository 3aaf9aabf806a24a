import pytest

from asyncpress.params import CParameter


@pytest.mark.parametrize(
    "factory,option,value",
    [
        (CParameter.window_log, "window_log", 20),
        (CParameter.hash_log, "hash_log", 17),
        (CParameter.chain_log, "chain_log", 16),
        (CParameter.search_log, "search_log", 3),
        (CParameter.min_match, "min_match", 4),
        (CParameter.target_length, "target_length", 8),
        (CParameter.ldm_hash_log, "ldm_hash_log", 20),
        (CParameter.ldm_min_match, "ldm_min_match", 64),
        (CParameter.ldm_bucket_size_log, "ldm_bucket_size_log", 3),
        (CParameter.ldm_hash_rate_log, "ldm_hash_rate_log", 4),
        (CParameter.nb_workers, "threads", 2),
        (CParameter.job_size, "job_size", 0),
    ],
)
def test_integer_parameters(factory, option, value):
    param = factory(value)
    assert param.option == option
    assert param.value == value


@pytest.mark.parametrize(
    "factory,option",
    [
        (CParameter.enable_long_distance_matching, "enable_ldm"),
        (CParameter.content_size_flag, "write_content_size"),
        (CParameter.checksum_flag, "write_checksum"),
        (CParameter.dict_id_flag, "write_dict_id"),
    ],
)
def test_flag_parameters(factory, option):
    assert factory(True) == CParameter(option, True)
    assert factory(False).value is False


def test_equality_and_hash():
    assert CParameter.window_log(10) == CParameter.window_log(10)
    assert CParameter.window_log(10) != CParameter.hash_log(10)
    assert len({CParameter.window_log(10), CParameter.window_log(10)}) == 1