# directory appraisal_aggregate.py
from appraisal import AppraisalProfile, APPRAISAL_DIMENSIONS


class AppraisalAggregate:
    """
    Running sum of member-room appraisals, used to score the level average
    without rescanning every room per candidate.

    Members are the critical-path rooms, or every room when no room is on
    the critical path.
    """

    def __init__(self, nodes):
        nodes = list(nodes)
        critical = [n for n in nodes if n.is_on_critical_path]
        self.members = critical if critical else nodes
        self._member_ids = {id(n) for n in self.members}
        self.count = len(self.members)
        self.sums = [0.0] * len(APPRAISAL_DIMENSIONS)
        self.recompute()

    def includes(self, node) -> bool:
        return id(node) in self._member_ids

    def _average_of(self, sums) -> AppraisalProfile:
        if self.count == 0:
            return AppraisalProfile.neutral()
        return AppraisalProfile.from_values(sums) / self.count

    def average(self) -> AppraisalProfile:
        return self._average_of(self.sums)

    def propose(self, old_profile: AppraisalProfile, new_profile: AppraisalProfile) -> AppraisalProfile:
        """Average if one member changed from old_profile to new_profile. No mutation."""
        sums = [s - o + n for s, o, n in zip(self.sums, old_profile.values(), new_profile.values())]
        return self._average_of(sums)

    def commit(self, old_profile: AppraisalProfile, new_profile: AppraisalProfile):
        self.sums = [s - o + n for s, o, n in zip(self.sums, old_profile.values(), new_profile.values())]
        return self.average()

    # --- Drift safeguard -------------------------------------------------------
    def _rescan(self):
        sums = [0.0] * len(APPRAISAL_DIMENSIONS)
        for node in self.members:
            for i, value in enumerate(node.appraisal.values()):
                sums[i] += value
        return sums

    def recompute(self):
        """Full rescan of member appraisals."""
        self.sums = self._rescan()
        return self.average()

    def drift(self) -> float:
        """Largest absolute gap between running sums and a fresh rescan."""
        fresh = self._rescan()
        return max((abs(a - b) for a, b in zip(self.sums, fresh)), default=0.0)
