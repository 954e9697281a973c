import json

import pytest

from jivaoperator.stats import (
    Replica,
    ResizeInput,
    Stats,
    Volume,
    Volumes,
)

SAMPLE = json.dumps(
    {
        "iqn": "iqn.2016-09.com.openebs.jiva:vol1",
        "ReadIOPS": 10,
        "TotalReadTime": "250",
        "WriteIOPS": 20,
        "TotalWriteBytes": 4096,
        "UsedLogicalBlocks": 1.50,
        "SectorSize": 512,
        "Size": 5368709120,
        "UpTime": 158.8,
        "Name": "vol1",
        "Replicas": [
            {"Address": "tcp://10.0.0.1:9502", "Mode": "RW"},
            {"Address": "tcp://10.0.0.2:9502", "Mode": "WO"},
        ],
        "Status": "RW",
        "IsClientConnected": True,
    }
)


def test_stats_from_json_fields():
    stats = Stats.from_json(SAMPLE)
    assert stats.iqn == "iqn.2016-09.com.openebs.jiva:vol1"
    assert stats.reads == "10"
    assert stats.total_read_time == "250"
    assert stats.writes == "20"
    assert stats.sector_size == "512"
    assert stats.size == "5368709120"
    assert stats.name == "vol1"
    assert stats.target_status == "RW"
    assert stats.is_client_connected is True
    assert stats.got is False


def test_stats_keep_number_text():
    stats = Stats.from_json('{"UsedLogicalBlocks": 1.50, "UpTime": 1e3}')
    assert stats.used_logical_blocks == "1.50"
    assert stats.up_time == "1e3"


def test_stats_missing_numbers_are_empty():
    stats = Stats.from_json("{}")
    assert stats.reads == ""
    assert stats.replicas == []


def test_stats_replicas():
    stats = Stats.from_json(SAMPLE)
    assert stats.replicas == [
        Replica(address="tcp://10.0.0.1:9502", mode="RW"),
        Replica(address="tcp://10.0.0.2:9502", mode="WO"),
    ]


def test_stats_keys_are_case_insensitive():
    stats = Stats.from_dict({"readiops": 7, "status": "RO", "NAME": "v"})
    assert stats.reads == "7"
    assert stats.target_status == "RO"
    assert stats.name == "v"


def test_stats_invalid_number_string():
    with pytest.raises(ValueError):
        Stats.from_dict({"ReadIOPS": "many"})


def test_stats_wrong_type():
    with pytest.raises(TypeError):
        Stats.from_dict({"Name": 5})


def test_replica_from_dict():
    replica = Replica.from_dict({"Address": "tcp://10.0.0.3:9502", "Mode": "ERR"})
    assert replica.address == "tcp://10.0.0.3:9502"
    assert replica.mode == "ERR"


def test_volume_round_trip():
    volume = Volume(
        id="vol1",
        type="volume",
        links={"self": "/v1/volumes/vol1"},
        actions={"revert": "/v1/volumes/vol1?action=revert"},
        name="vol1",
        replica_count=3,
        read_only="false",
    )
    assert Volume.from_dict(volume.to_dict()) == volume


def test_volume_to_dict_omits_empty_id_and_type():
    out = Volume(name="vol1", replica_count=1).to_dict()
    assert "id" not in out
    assert "type" not in out
    assert out["links"] is None
    assert out["name"] == "vol1"
    assert out["replicaCount"] == 1


def test_resize_input_to_dict():
    out = ResizeInput(name="vol1", size="10G").to_dict()
    assert out["name"] == "vol1"
    assert out["size"] == "10G"
    assert "id" not in out


def test_volumes_from_dict():
    volumes = Volumes.from_dict(
        {
            "type": "collection",
            "data": [
                {"name": "vol1", "replicaCount": 3, "readOnly": "false"},
                {"name": "vol2", "replicaCount": 1},
            ],
        }
    )
    assert volumes.type == "collection"
    assert [v.name for v in volumes.data] == ["vol1", "vol2"]
    assert volumes.data[0].replica_count == 3
    assert volumes.data[1].read_only == ""


def test_volumes_round_trip():
    volumes = Volumes(type="collection", data=[Volume(name="vol1", replica_count=2)])
    assert Volumes.from_dict(volumes.to_dict()) == volumes