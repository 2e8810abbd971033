import base64

import pytest

from suikit.base_types import SuiAddress
from suikit.validator import (
    DelegatedStake,
    Stake,
    StakeStatus,
    SuiSystemStateSummary,
    SuiValidatorSummary,
    ValidatorsApy,
)

ADDR_A = "0x7e875ea78ee09f08d72e2676cf84e0f1c8ac61d94fa339cc8e37cace85bebc6e"
ADDR_B = "0x13c1c3d0e15b4039cec4291c75b77c972c10c8e8e70ab4ca174cf336917cb4db"


def _stake(status, **extra):
    data = {
        "stakedSuiId": ADDR_A,
        "stakeRequestEpoch": "12",
        "stakeActiveEpoch": "13",
        "principal": "1000000000",
        "status": status,
    }
    data.update(extra)
    return data


def test_active_stake_reads_flattened_status():
    stake = Stake.from_json(_stake("Active", estimatedReward="5555"))
    assert stake.is_active()
    assert stake.status is StakeStatus.ACTIVE
    assert stake.estimated_reward == 5555
    assert stake.principal == 1000000000
    assert stake.stake_request_epoch == 12
    assert stake.stake_active_epoch == 13
    assert stake.staked_sui_id == SuiAddress.from_hex(ADDR_A)


@pytest.mark.parametrize("status", ["Pending", "Unstaked"])
def test_inactive_stakes(status):
    stake = Stake.from_json(_stake(status))
    assert not stake.is_active()
    assert stake.status.value == status
    assert stake.estimated_reward is None


def test_unknown_stake_status_raises():
    with pytest.raises(ValueError):
        Stake.from_json(_stake("Frozen"))


def test_delegated_stake_parses_all_stakes():
    data = {
        "validatorAddress": ADDR_A,
        "stakingPool": ADDR_B,
        "stakes": [_stake("Active", estimatedReward="7"), _stake("Pending")],
    }
    delegated = DelegatedStake.from_json(data)
    assert delegated.validator_address == SuiAddress.from_hex(ADDR_A)
    assert delegated.staking_pool == SuiAddress.from_hex(ADDR_B)
    assert [s.is_active() for s in delegated.stakes] == [True, False]


def test_validator_summary_decodes_keys_and_numbers():
    key = b"protocol-key-bytes"
    data = {
        "suiAddress": ADDR_A,
        "protocolPubkeyBytes": base64.b64encode(key).decode(),
        "name": "validator-one",
        "votingPower": "123",
        "gasPrice": 1000,
        "stakingPoolId": ADDR_B,
    }
    summary = SuiValidatorSummary.from_json(data)
    assert summary.sui_address == SuiAddress.from_hex(ADDR_A)
    assert summary.protocol_pubkey_bytes == key
    assert summary.name == "validator-one"
    assert summary.voting_power == 123
    assert summary.gas_price == 1000
    assert summary.staking_pool_id == SuiAddress.from_hex(ADDR_B)
    assert summary.network_pubkey_bytes == b""


def test_validator_summary_rejects_bad_address():
    with pytest.raises(ValueError):
        SuiValidatorSummary.from_json({"suiAddress": "0xzz"})


def test_system_state_summary_parses_validators_and_removals():
    data = {
        "epoch": "42",
        "safeMode": True,
        "stakeSubsidyDecreaseRate": 1000,
        "activeValidators": [{"suiAddress": ADDR_A, "name": "a"}, {"suiAddress": ADDR_B}],
        "pendingRemovals": ["3", "9"],
        "atRiskValidators": [[ADDR_A, "2"]],
    }
    state = SuiSystemStateSummary.from_json(data)
    assert state.epoch == 42
    assert state.safe_mode is True
    assert state.stake_subsidy_decrease_rate == 1000
    assert [v.sui_address for v in state.active_validators] == [
        SuiAddress.from_hex(ADDR_A),
        SuiAddress.from_hex(ADDR_B),
    ]
    assert state.active_validators[0].name == "a"
    assert state.pending_removals == [3, 9]
    assert state.at_risk_validators == [[ADDR_A, "2"]]


def test_validators_apy_map_later_entry_wins():
    apy = ValidatorsApy.from_json(
        {
            "epoch": "8",
            "apys": [
                {"address": ADDR_A, "apy": 0.05},
                {"address": ADDR_B, "apy": 0.07},
                {"address": ADDR_A, "apy": 0.06},
            ],
        }
    )
    assert apy.epoch == 8
    assert apy.apy_map() == {ADDR_A: 0.06, ADDR_B: 0.07}