"""Validators, stakes and the system state summary as exchanged over JSON."""

from __future__ import annotations

import base64
import enum
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Optional, TypeVar

from .base_types import SuiAddress
from .common import parse_safe_int

T = TypeVar("T")

_ZERO_ADDRESS = SuiAddress(bytes(32))


def _identity(value: Any) -> Any:
    return value


def _safe_int_list(value: Any) -> list[int]:
    return [parse_safe_int(item) for item in value]


def _json(key: str, parse: Callable[[Any], Any], default: Any = 0, factory: Any = None) -> Any:
    metadata = {"json": key, "parse": parse}
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _addr(key: str) -> Any:
    return _json(key, SuiAddress.from_hex, _ZERO_ADDRESS)


def _b64(key: str) -> Any:
    return _json(key, base64.b64decode, b"")


def _int(key: str) -> Any:
    return _json(key, parse_safe_int, 0)


def _str(key: str) -> Any:
    return _json(key, str, "")


def _load(cls: type[T], data: dict[str, Any]) -> T:
    """Build a dataclass from JSON using the keys and parsers in field metadata.

    Absent or null keys keep the field's default.
    """
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        key = f.metadata.get("json")
        if key is None:
            continue
        raw = data.get(key)
        if raw is not None:
            kwargs[f.name] = f.metadata["parse"](raw)
    return cls(**kwargs)


class StakeStatus(str, enum.Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    UNSTAKED = "Unstaked"


STAKE_STATUS_ACTIVE = StakeStatus.ACTIVE.value
STAKE_STATUS_PENDING = StakeStatus.PENDING.value
STAKE_STATUS_UNSTAKED = StakeStatus.UNSTAKED.value


@dataclass
class Stake:
    """One staked position; ``estimated_reward`` is set only for active stakes."""

    staked_sui_id: SuiAddress
    stake_request_epoch: int
    stake_active_epoch: int
    principal: int
    status: StakeStatus
    estimated_reward: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Stake:
        raw_status = data.get("status")
        try:
            status = StakeStatus(raw_status)
        except ValueError:
            raise ValueError(f"unknown stake status {raw_status!r}") from None
        reward = None
        if status is StakeStatus.ACTIVE:
            reward = parse_safe_int(data.get("estimatedReward", 0))
        return cls(
            staked_sui_id=SuiAddress.from_hex(data["stakedSuiId"]),
            stake_request_epoch=parse_safe_int(data["stakeRequestEpoch"]),
            stake_active_epoch=parse_safe_int(data["stakeActiveEpoch"]),
            principal=parse_safe_int(data["principal"]),
            status=status,
            estimated_reward=reward,
        )

    def is_active(self) -> bool:
        return self.status is StakeStatus.ACTIVE


@dataclass
class DelegatedStake:
    validator_address: SuiAddress
    staking_pool: SuiAddress
    stakes: list[Stake] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> DelegatedStake:
        return cls(
            validator_address=SuiAddress.from_hex(data["validatorAddress"]),
            staking_pool=SuiAddress.from_hex(data["stakingPool"]),
            stakes=[Stake.from_json(item) for item in data.get("stakes") or []],
        )


@dataclass
class SuiValidatorSummary:
    """A validator's identity, keys, addresses and staking pool figures."""

    sui_address: SuiAddress = _addr("suiAddress")
    protocol_pubkey_bytes: bytes = _b64("protocolPubkeyBytes")
    network_pubkey_bytes: bytes = _b64("networkPubkeyBytes")
    worker_pubkey_bytes: bytes = _b64("workerPubkeyBytes")
    proof_of_possession_bytes: bytes = _b64("proofOfPossessionBytes")
    operation_cap_id: SuiAddress = _addr("operationCapId")
    name: str = _str("name")
    description: str = _str("description")
    image_url: str = _str("imageUrl")
    project_url: str = _str("projectUrl")
    p2p_address: str = _str("p2pAddress")
    net_address: str = _str("netAddress")
    primary_address: str = _str("primaryAddress")
    worker_address: str = _str("workerAddress")

    next_epoch_protocol_pubkey_bytes: bytes = _b64("nextEpochProtocolPubkeyBytes")
    next_epoch_proof_of_possession: bytes = _b64("nextEpochProofOfPossession")
    next_epoch_network_pubkey_bytes: bytes = _b64("nextEpochNetworkPubkeyBytes")
    next_epoch_worker_pubkey_bytes: bytes = _b64("nextEpochWorkerPubkeyBytes")
    next_epoch_net_address: str = _str("nextEpochNetAddress")
    next_epoch_p2p_address: str = _str("nextEpochP2pAddress")
    next_epoch_primary_address: str = _str("nextEpochPrimaryAddress")
    next_epoch_worker_address: str = _str("nextEpochWorkerAddress")

    voting_power: int = _int("votingPower")
    gas_price: int = _int("gasPrice")
    commission_rate: int = _int("commissionRate")
    next_epoch_stake: int = _int("nextEpochStake")
    next_epoch_gas_price: int = _int("nextEpochGasPrice")
    next_epoch_commission_rate: int = _int("nextEpochCommissionRate")
    staking_pool_id: SuiAddress = _addr("stakingPoolId")

    staking_pool_activation_epoch: int = _int("stakingPoolActivationEpoch")
    staking_pool_deactivation_epoch: int = _int("stakingPoolDeactivationEpoch")

    staking_pool_sui_balance: int = _int("stakingPoolSuiBalance")
    rewards_pool: int = _int("rewardsPool")
    pool_token_balance: int = _int("poolTokenBalance")
    pending_stake: int = _int("pendingStake")
    pending_pool_token_withdraw: int = _int("pendingPoolTokenWithdraw")
    pending_total_sui_withdraw: int = _int("pendingTotalSuiWithdraw")
    exchange_rates_id: SuiAddress = _addr("exchangeRatesId")
    exchange_rates_size: int = _int("exchangeRatesSize")

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiValidatorSummary:
        return _load(cls, data)


def _validators(value: Any) -> list[SuiValidatorSummary]:
    return [SuiValidatorSummary.from_json(item) for item in value]


@dataclass
class SuiSystemStateSummary:
    """The system state of one epoch, including the active validator set."""

    epoch: int = _int("epoch")
    protocol_version: int = _int("protocolVersion")
    system_state_version: int = _int("systemStateVersion")
    storage_fund_total_object_storage_rebates: int = _int("storageFundTotalObjectStorageRebates")
    storage_fund_non_refundable_balance: int = _int("storageFundNonRefundableBalance")
    reference_gas_price: int = _int("referenceGasPrice")
    safe_mode: bool = _json("safeMode", bool, False)
    safe_mode_storage_rewards: int = _int("safeModeStorageRewards")
    safe_mode_computation_rewards: int = _int("safeModeComputationRewards")
    safe_mode_storage_rebates: int = _int("safeModeStorageRebates")
    safe_mode_non_refundable_storage_fee: int = _int("safeModeNonRefundableStorageFee")
    epoch_start_timestamp_ms: int = _int("epochStartTimestampMs")
    epoch_duration_ms: int = _int("epochDurationMs")
    stake_subsidy_start_epoch: int = _int("stakeSubsidyStartEpoch")
    max_validator_count: int = _int("maxValidatorCount")
    min_validator_joining_stake: int = _int("minValidatorJoiningStake")
    validator_low_stake_threshold: int = _int("validatorLowStakeThreshold")
    validator_very_low_stake_threshold: int = _int("validatorVeryLowStakeThreshold")
    validator_low_stake_grace_period: int = _int("validatorLowStakeGracePeriod")
    stake_subsidy_balance: int = _int("stakeSubsidyBalance")
    stake_subsidy_distribution_counter: int = _int("stakeSubsidyDistributionCounter")
    stake_subsidy_current_distribution_amount: int = _int(
        "stakeSubsidyCurrentDistributionAmount"
    )
    stake_subsidy_period_length: int = _int("stakeSubsidyPeriodLength")
    stake_subsidy_decrease_rate: int = _json("stakeSubsidyDecreaseRate", int, 0)
    total_stake: int = _int("totalStake")
    active_validators: list[SuiValidatorSummary] = _json(
        "activeValidators", _validators, factory=list
    )
    pending_active_validators_id: SuiAddress = _addr("pendingActiveValidatorsId")
    pending_active_validators_size: int = _int("pendingActiveValidatorsSize")
    pending_removals: list[int] = _json("pendingRemovals", _safe_int_list, factory=list)
    staking_pool_mappings_id: SuiAddress = _addr("stakingPoolMappingsId")
    staking_pool_mappings_size: int = _int("stakingPoolMappingsSize")
    inactive_pools_id: SuiAddress = _addr("inactivePoolsId")
    inactive_pools_size: int = _int("inactivePoolsSize")
    validator_candidates_id: SuiAddress = _addr("validatorCandidatesId")
    validator_candidates_size: int = _int("validatorCandidatesSize")
    at_risk_validators: Any = _json("atRiskValidators", _identity, None)
    validator_report_records: Any = _json("validatorReportRecords", _identity, None)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> SuiSystemStateSummary:
        return _load(cls, data)


@dataclass
class ValidatorsApy:
    epoch: int
    apys: list[tuple[str, float]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ValidatorsApy:
        return cls(
            epoch=parse_safe_int(data["epoch"]),
            apys=[(item["address"], float(item["apy"])) for item in data.get("apys") or []],
        )

    def apy_map(self) -> dict[str, float]:
        """APY by validator address; a later entry for an address wins."""
        return dict(self.apys)