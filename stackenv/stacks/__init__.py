"""Remote stack output fetching."""

from .cloudformation import CloudFormationClient, RegionResolver, outputs_from_stack

__all__ = ["CloudFormationClient", "RegionResolver", "outputs_from_stack"]
