import unittest

import gh_payloads as gp
from gh2tg.models import (
    EventKind,
    ForkSummary,
    IssueSummary,
    PullRequestSummary,
    PushSummary,
    StarSummary,
)
from gh2tg.services.github import normalize


class TestNormalizePush(unittest.TestCase):
    def test_push_to_main(self):
        summary = normalize("push", gp.push())
        self.assertIsInstance(summary, PushSummary)
        self.assertEqual(summary.branch_name, "main")
        self.assertEqual(summary.commit_messages, ("Fix bug", "Add feature"))
        self.assertIn("+ a.ts", summary.changed_files)
        self.assertIn("~ b.ts", summary.changed_files)
        self.assertEqual(summary.authors, ("Alice", "Bob"))
        self.assertEqual(summary.pusher, "alice")
        self.assertEqual(summary.repository_name, "octo-org/hello-world")
        self.assertTrue(summary.compare_url.endswith("/compare/abc...def"))

    def test_tag_push_is_filtered(self):
        self.assertIsNone(normalize("push", gp.push(ref="refs/tags/v1.0.0")))

    def test_non_branch_refs_are_filtered(self):
        for ref in ("refs/pull/1/head", "heads/main", "", None):
            with self.subTest(ref=ref):
                self.assertIsNone(normalize("push", gp.push(ref=ref)))

    def test_nested_branch_name_keeps_slashes(self):
        summary = normalize("push", gp.push(ref="refs/heads/feature/login"))
        self.assertEqual(summary.branch_name, "feature/login")

    def test_multiline_commit_message_kept_verbatim(self):
        payload = gp.push(commits=[gp.commit("Title\n\nLonger body")])
        summary = normalize("push", payload)
        self.assertEqual(summary.commit_messages, ("Title\n\nLonger body",))

    def test_authors_deduplicated_in_first_seen_order(self):
        payload = gp.push(
            commits=[
                gp.commit("1", author="Bob"),
                gp.commit("2", author="alice"),
                gp.commit("3", author="Bob"),
                gp.commit("4", author="Alice"),
            ]
        )
        summary = normalize("push", payload)
        self.assertEqual(summary.authors, ("Bob", "alice", "Alice"))

    def test_changed_files_unique_per_tag(self):
        payload = gp.push(
            commits=[
                gp.commit("1", added=["x", "y"], modified=["z"]),
                gp.commit("2", modified=["x", "z"], removed=["y"]),
                gp.commit("3", modified=["z"]),
            ]
        )
        summary = normalize("push", payload)
        self.assertEqual(summary.changed_files, ("+ x", "+ y", "~ z", "- y", "~ x"))
        self.assertEqual(len(summary.changed_files), len(set(summary.changed_files)))

    def test_empty_commit_list(self):
        summary = normalize("push", gp.push(commits=[]))
        self.assertEqual(summary.commit_messages, ())
        self.assertEqual(summary.changed_files, ())

    def test_missing_required_field_discards_event(self):
        payload = gp.push()
        del payload["pusher"]
        self.assertIsNone(normalize("push", payload))

        payload = gp.push()
        del payload["commits"][1]["author"]
        self.assertIsNone(normalize("push", payload))


class TestNormalizeStarFork(unittest.TestCase):
    def test_star_created(self):
        summary = normalize("star", gp.star())
        self.assertIsInstance(summary, StarSummary)
        self.assertEqual(summary.action, "created")
        self.assertEqual(summary.star_count, 42)
        self.assertEqual(summary.user_login, "alice")
        self.assertEqual(summary.user_url, "https://github.com/alice")

    def test_star_deleted_passes_through(self):
        summary = normalize("star", gp.star(action="deleted", stars=41))
        self.assertEqual(summary.action, "deleted")
        self.assertEqual(summary.star_count, 41)

    def test_star_requires_action_repository_sender(self):
        for key in ("action", "repository", "sender"):
            payload = gp.star()
            del payload[key]
            with self.subTest(missing=key):
                self.assertIsNone(normalize("star", payload))

    def test_fork(self):
        summary = normalize("fork", gp.fork())
        self.assertIsInstance(summary, ForkSummary)
        self.assertEqual(summary.fork_name, "alice/hello-world")
        self.assertEqual(summary.fork_url, "https://github.com/alice/hello-world")
        self.assertEqual(summary.fork_count, 7)

    def test_fork_requires_forkee_repository_sender(self):
        for key in ("forkee", "repository", "sender"):
            payload = gp.fork()
            payload[key] = None
            with self.subTest(missing=key):
                self.assertIsNone(normalize("fork", payload))


class TestNormalizeIssuesAndPulls(unittest.TestCase):
    def test_issue_opened(self):
        summary = normalize("issues", gp.issue())
        self.assertIsInstance(summary, IssueSummary)
        self.assertEqual(summary.number, 12)
        self.assertEqual(summary.labels, ("bug",))
        self.assertEqual(summary.assignees, ("bob",))
        self.assertEqual(summary.body, "Steps to reproduce")

    def test_issue_actions_filtered(self):
        for action in ("edited", "labeled", "assigned", "deleted", "transferred"):
            with self.subTest(action=action):
                self.assertIsNone(normalize("issues", gp.issue(action=action)))
        for action in ("opened", "closed", "reopened"):
            with self.subTest(action=action):
                self.assertIsNotNone(normalize("issues", gp.issue(action=action)))

    def test_issue_body_capped_without_ellipsis(self):
        summary = normalize("issues", gp.issue(body="x" * 500))
        self.assertEqual(summary.body, "x" * 200)

    def test_issue_null_body(self):
        summary = normalize("issues", gp.issue(body=None))
        self.assertEqual(summary.body, "")

    def test_issue_missing_sender(self):
        payload = gp.issue()
        del payload["sender"]
        self.assertIsNone(normalize("issues", payload))

    def test_pull_request(self):
        summary = normalize("pull_request", gp.pull_request(action="closed", merged=True))
        self.assertIsInstance(summary, PullRequestSummary)
        self.assertEqual(summary.base_branch, "main")
        self.assertEqual(summary.head_branch, "feature/x")
        self.assertTrue(summary.merged)
        self.assertFalse(summary.draft)
        self.assertEqual(
            (summary.changed_files, summary.additions, summary.deletions), (3, 10, 2)
        )

    def test_pull_request_actions_filtered(self):
        for action in ("synchronize", "edited", "review_requested", "labeled"):
            with self.subTest(action=action):
                self.assertIsNone(normalize("pull_request", gp.pull_request(action=action)))

    def test_pull_request_missing_head(self):
        payload = gp.pull_request()
        del payload["pull_request"]["head"]
        self.assertIsNone(normalize("pull_request", payload))


class TestNormalizeDispatch(unittest.TestCase):
    def test_unsupported_event_types(self):
        for event in ("ping", "release", "watch", "", None, "PUSH"):
            with self.subTest(event=event):
                self.assertIsNone(normalize(event, gp.push()))

    def test_accepts_event_kind(self):
        self.assertIsNotNone(normalize(EventKind.STAR, gp.star()))

    def test_non_mapping_payload(self):
        for payload in (None, [], "push", 42):
            with self.subTest(payload=payload):
                self.assertIsNone(normalize("push", payload))

    def test_mismatched_shape(self):
        self.assertIsNone(normalize("push", gp.star()))
        self.assertIsNone(normalize("fork", gp.star()))
        self.assertIsNone(normalize("issues", gp.pull_request()))


if __name__ == "__main__":
    unittest.main()
