from __future__ import annotations

import unittest

from builders import application, day, job, transition
from hiring_funnel.services.performance import (
    compute_hiring_manager_performance,
    compute_recruiter_performance,
    referenced_user_ids,
)
from hiring_funnel.services.source_performance import compute_source_performance
from hiring_funnel.services.stage_history import reconstruct_timelines


class SourcePerformanceTests(unittest.TestCase):
    def test_groups_by_source_with_unknown_bucket(self) -> None:
        apps = [
            application(1, source="referral", status="Hired"),
            application(2, source="referral", status="submitted"),
            application(3, source="  ", status="shortlisted"),
            application(4, source=None, status="interview"),
            application(5, source="LinkedIn", status="hired"),
        ]
        rows = compute_source_performance(apps, shortlist_statuses=["shortlisted", "interview"], hired_statuses=["hired"])

        self.assertListEqual([r.source for r in rows], ["referral", "unknown", "LinkedIn"])
        referral, unknown, linkedin = rows
        self.assertEqual((referral.apps, referral.shortlist, referral.hires, referral.conversion), (2, 0, 1, 50.0))
        self.assertEqual((unknown.apps, unknown.shortlist, unknown.hires, unknown.conversion), (2, 2, 0, 0))
        self.assertEqual(linkedin.conversion, 100.0)

    def test_no_applications(self) -> None:
        self.assertListEqual(compute_source_performance([], shortlist_statuses=[], hired_statuses=[]), [])


class PerformanceRollupTests(unittest.TestCase):
    def setUp(self) -> None:
        self.jobs = [
            job(1, posted_by=10, hiring_manager_id=20),
            job(2, posted_by=10),
            job(3, posted_by=11, hiring_manager_id=21),
        ]
        self.applications = [
            application(1, job_id=1, applied_at=day(0)),
            application(2, job_id=2, applied_at=day(1), stage_changed_at=day(3)),
            application(3, job_id=3, applied_at=day(0)),
        ]
        self.timelines = reconstruct_timelines(
            [
                transition(1, 1, 1, day(1)),
                transition(2, 1, 2, day(2)),
                transition(3, 1, 3, day(6)),
                transition(4, 3, 1, day(0)),
                transition(5, 3, 2, day(4)),
            ]
        )

    def test_referenced_users(self) -> None:
        self.assertSetEqual(referenced_user_ids(self.jobs), {10, 11, 20, 21})

    def test_recruiter_rollup_is_scoped_to_own_applications(self) -> None:
        rows = compute_recruiter_performance(self.jobs, self.applications, self.timelines, {10: "Rita Ray"})

        self.assertListEqual([r.id for r in rows], [10, 11])
        rita, other = rows
        self.assertEqual(rita.name, "Rita Ray")
        self.assertEqual((rita.jobs_handled, rita.candidates_screened), (2, 2))
        # Application 2 has no history; its cached stage change stands in.
        self.assertEqual(rita.avg_first_action_days, 1.5)
        self.assertEqual(rita.avg_stage_move_days, 2.5)
        self.assertEqual(other.name, "Recruiter #11")
        self.assertEqual(other.avg_first_action_days, 0.0)
        self.assertEqual(other.avg_stage_move_days, 4.0)

    def test_recruiter_without_activity(self) -> None:
        rows = compute_recruiter_performance([job(9, posted_by=12)], [], {}, {})
        self.assertEqual(rows[0].candidates_screened, 0)
        self.assertIsNone(rows[0].avg_first_action_days)
        self.assertIsNone(rows[0].avg_stage_move_days)

    def test_hiring_manager_rollup(self) -> None:
        rows = compute_hiring_manager_performance(
            self.jobs, self.applications, self.timelines, {}, review_stage_ids=[2]
        )

        self.assertListEqual([r.id for r in rows], [20, 21])
        first, second = rows
        self.assertEqual(first.name, "HM #20")
        self.assertEqual((first.jobs_owned, first.avg_feedback_days, first.sample_size, first.waiting_count), (1, 4.0, 1, 0))
        self.assertIsNone(second.avg_feedback_days)
        self.assertEqual((second.sample_size, second.waiting_count), (0, 1))

    def test_hiring_manager_rollup_without_review_stages(self) -> None:
        rows = compute_hiring_manager_performance(
            self.jobs, self.applications, self.timelines, {20: "Hana Moss"}, review_stage_ids=[]
        )
        self.assertEqual(rows[0].name, "Hana Moss")
        self.assertEqual((rows[0].avg_feedback_days, rows[0].sample_size, rows[0].waiting_count), (None, 0, 0))


if __name__ == "__main__":
    unittest.main()
