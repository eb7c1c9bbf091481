from fastapi import APIRouter, HTTPException, status

from aquascore.schemas.reference import ProfileListResponse, ProfileRead, TargetRangeRead
from aquascore.services.profile_targets import (
    ProfileDefinition,
    get_metric_weight,
    is_known_profile,
    list_profiles,
    resolve_profile,
    targets_for,
)

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _to_profile_read(profile: ProfileDefinition) -> ProfileRead:
    targets = targets_for(profile.id)
    return ProfileRead(
        id=profile.id,
        label=profile.label,
        description=profile.description,
        targets={metric: TargetRangeRead(**target.__dict__) for metric, target in targets.items()},
        weights={metric: get_metric_weight(profile.id, metric) for metric in targets},
    )


@router.get("", response_model=ProfileListResponse)
def get_profiles() -> ProfileListResponse:
    items = [_to_profile_read(profile) for profile in list_profiles()]
    return ProfileListResponse(count=len(items), items=items)


@router.get("/{profile_id}", response_model=ProfileRead)
def get_profile(profile_id: str) -> ProfileRead:
    if not is_known_profile(profile_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return _to_profile_read(resolve_profile(profile_id))
