"""
Parsing of ``git log`` output into :class:`Commit` records.

The log is requested with a fixed pretty format: every commit is
preceded by :data:`LOG_SEPARATOR`, its fields are separated by
:data:`LOG_DELIMITER`, and each field is written as ``NAME:value``.
Hash, author and committer values are tab separated.

For every commit the parser

* binds the capture groups of the header, merge and revert patterns to
  the configured field names,
* collects issue references, ``@mentions``, ``Co-authored-by`` and
  ``Signed-off-by`` trailers and notes (``BREAKING CHANGE: ...``) from
  the body, skipping fenced code blocks,
* optionally splits additional headers in the body into sub-commits,
* enriches the commit from Jira when a ``jira_issue_id`` was bound,
* fetches the list of changed files, and
* applies the configured post-processor.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional

from vc_changelog.config.options import Options
from vc_changelog.jira.jira_client import JiraClient, JiraError
from vc_changelog.parsing.binding import FieldBinding
from vc_changelog.parsing.commit_model import (
    EPOCH,
    Author,
    Commit,
    Committer,
    Contact,
    Hash,
    JiraIssue,
    Merge,
    Note,
    Ref,
    Revert,
)
from vc_changelog.parsing.fence import FenceDetector
from vc_changelog.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


LOG_SEPARATOR = "@@__CHGLOG__@@"
LOG_DELIMITER = "@@__CHGLOG_DELIMITER__@@"

HASH_FIELD = "HASH"
AUTHOR_FIELD = "AUTHOR"
COMMITTER_FIELD = "COMMITTER"
SUBJECT_FIELD = "SUBJECT"
BODY_FIELD = "BODY"

LOG_FORMAT = LOG_SEPARATOR + LOG_DELIMITER.join(
    [
        HASH_FIELD + ":%H\t%h",
        AUTHOR_FIELD + ":%an\t%ae\t%at",
        COMMITTER_FIELD + ":%cn\t%ce\t%ct",
        SUBJECT_FIELD + ":%s",
        BODY_FIELD + ":%b",
    ]
)

# Names are runs of letters, whitespace, hyphens and brackets.
_CONTACT = r"\s+((?:[^\W\d_]|[\s\-\[\]])+)\s+<([\w+\-\[\].@]+)>"


def _join_escaped(values: List[str]) -> str:
    return "|".join(re.escape(v) for v in values)


def _split_tabs(value: str, count: int) -> List[str]:
    parts = value.split("\t")
    return parts + [""] * (count - len(parts))


def _parse_timestamp(value: str) -> datetime:
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return EPOCH


class CommitParser:
    """Turn the raw commit log into :class:`Commit` records.

    Parameters
    ----------
    client : GitClient
        Provides the log output and the files changed by each commit.
    options : Options
        Patterns, keywords and flags controlling the parse.
    jira_client : JiraClient, optional
        Used to enrich commits that bind a ``jira_issue_id``. Without a
        client no enrichment happens.
    """

    def __init__(
        self,
        client: GitClient,
        options: Options,
        jira_client: Optional[JiraClient] = None,
    ) -> None:
        self.client = client
        self.options = options
        self.jira_client = jira_client

        ref_actions = _join_escaped(options.ref_actions)
        issue_prefix = _join_escaped(options.issue_prefix)
        note_keywords = _join_escaped(options.note_keywords)

        self._re_header = re.compile(options.header_pattern)
        self._re_merge = self._compile_optional(options.merge_pattern)
        self._re_revert = self._compile_optional(options.revert_pattern)
        self._re_ref = re.compile(
            "(" + ref_actions + r")\s?([\w/\.\-]+)?(?:" + issue_prefix + r")(\d+)",
            re.IGNORECASE,
        )
        self._re_issue = re.compile("(?:" + issue_prefix + r")(\d+)")
        self._re_notes = re.compile(r"^\s*(" + note_keywords + r")[:\s]+(.*)", re.IGNORECASE)
        self._re_mention = re.compile(r"@([\w-]+)")
        self._re_sign_off = re.compile("Signed-off-by:" + _CONTACT)
        self._re_co_author = re.compile("Co-authored-by:" + _CONTACT)
        self._re_jira_description = self._compile_optional(options.jira_issue_description_pattern)

        self._header_binding = FieldBinding(Commit, options.header_pattern_maps)
        self._merge_binding = FieldBinding(Merge, options.merge_pattern_maps)
        self._revert_binding = FieldBinding(Revert, options.revert_pattern_maps)

    @staticmethod
    def _compile_optional(pattern: str) -> Optional[re.Pattern]:
        return re.compile(pattern) if pattern else None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    def parse(self, revision: str = "") -> List[Commit]:
        """Read the log for ``revision`` and parse every commit in it.

        Raises
        ------
        GitError
            If reading the log or the changed files of any commit fails.
        """
        output = self.client.log(revision, LOG_FORMAT, self.options.paths)
        return self.parse_log(output)

    def parse_log(self, output: str) -> List[Commit]:
        """Parse log ``output`` produced with :data:`LOG_FORMAT`."""
        processor = self.options.processor
        commits: List[Commit] = []
        for record in output.split(LOG_SEPARATOR)[1:]:
            commit = self._parse_commit(record)
            if processor is not None:
                processed = processor.process_commit(commit)
                if processed is None:
                    logger.debug("Processor dropped commit %s", commit.hash.short)
                    continue
                commit = processed
            commits.append(commit)
        logger.debug("Parsed %d commits", len(commits))
        return commits

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    def _parse_commit(self, record: str) -> Commit:
        commit = Commit(hash=Hash(long="", short=""))

        for token in record.split(LOG_DELIMITER):
            name, sep, value = token.partition(":")
            if not sep:
                logger.warning("Skipping malformed log field: %r", token[:40])
                continue
            name = name.strip()
            value = value.strip()

            if name == HASH_FIELD:
                long_hash, short_hash = _split_tabs(value, 2)[:2]
                commit.hash = Hash(long=long_hash, short=short_hash)
            elif name == AUTHOR_FIELD:
                author_name, email, ts = _split_tabs(value, 3)[:3]
                commit.author = Author(author_name, email, _parse_timestamp(ts))
            elif name == COMMITTER_FIELD:
                committer_name, email, ts = _split_tabs(value, 3)[:3]
                commit.committer = Committer(committer_name, email, _parse_timestamp(ts))
            elif name == SUBJECT_FIELD:
                self._process_header(commit, value)
            elif name == BODY_FIELD:
                self._process_body(commit, value)

        commit.refs = self._uniq_refs(commit.refs)
        commit.mentions = list(dict.fromkeys(commit.mentions))

        commit.changed_files = self.client.changed_files(commit.hash.short)
        for sub_commit in commit.sub_commits:
            sub_commit.changed_files = list(commit.changed_files)

        return commit

    def _process_header(self, commit: Commit, header: str) -> None:
        commit.header = header

        match = self._re_header.search(header)
        if match is not None:
            self._header_binding.apply(commit, match)

        if self._re_merge is not None:
            match = self._re_merge.search(header)
            if match is not None:
                commit.merge = self._merge_binding.apply(Merge(), match)

        if self._re_revert is not None:
            match = self._re_revert.search(header)
            if match is not None:
                commit.revert = self._revert_binding.apply(Revert(), match)

        commit.refs = self._parse_refs(header)
        commit.mentions = self._parse_mentions(header)

        if commit.jira_issue_id:
            self._process_jira_issue(commit)

    def _process_body(self, commit: Commit, body: str) -> None:
        body = body.replace("\r\n", "\n").replace("\r", "\n")
        commit.body = body

        if self.options.multiline_commit:
            self._split_sub_commits(commit, body)

        commit.notes = []
        in_note = False
        trim = False
        fence = FenceDetector()
        trimmed_body: List[str] = []

        for line in body.split("\n"):
            if not in_note:
                trim = False
            fence.update(line)

            if not fence.in_codeblock and self._extract_line_metadata(commit, line):
                trim = True
                in_note = False

            match = self._re_notes.match(line)
            if match is not None:
                in_note = True
                trim = True
                commit.notes.append(Note(title=match.group(1), body=match.group(2)))
            elif in_note:
                commit.notes[-1].body += "\n" + line

            if not trim:
                trimmed_body.append(line)

        commit.trimmed_body = "\n".join(trimmed_body).strip()
        for note in commit.notes:
            note.body = note.body.strip()

    def _split_sub_commits(self, commit: Commit, body: str) -> None:
        # Only a note opening the body is stripped before splitting.
        for line in self._re_notes.sub("", body, count=1).split("\n"):
            match = self._re_header.search(line)
            if match is None:
                continue
            sub_commit = Commit(
                hash=commit.hash,
                author=commit.author,
                committer=commit.committer,
                header=line,
                changed_files=list(commit.changed_files),
            )
            self._header_binding.apply(sub_commit, match)
            sub_commit.refs = self._parse_refs(line)
            sub_commit.mentions = self._parse_mentions(line)
            if sub_commit.jira_issue_id:
                self._process_jira_issue(sub_commit)
            commit.sub_commits.append(sub_commit)

    # ------------------------------------------------------------------
    # Line metadata
    # ------------------------------------------------------------------
    def _extract_line_metadata(self, commit: Commit, line: str) -> bool:
        """Collect refs, mentions and trailers from ``line``.

        Returns True if anything was found, meaning the line is dropped
        from the trimmed body.
        """
        found = False

        refs = self._parse_refs(line)
        if refs:
            found = True
            commit.refs.extend(refs)

        mentions = self._parse_mentions(line)
        if mentions:
            found = True
            commit.mentions.extend(mentions)

        co_authors = self._parse_contacts(self._re_co_author, line)
        if co_authors:
            found = True
            commit.co_authors.extend(co_authors)

        signers = self._parse_contacts(self._re_sign_off, line)
        if signers:
            found = True
            commit.signers.extend(signers)

        return found

    def _parse_refs(self, text: str) -> List[Ref]:
        refs = [
            Ref(action=m.group(1), source=m.group(2) or "", ref=m.group(3))
            for m in self._re_ref.finditer(text)
        ]
        for m in self._re_issue.finditer(text):
            if not any(ref.ref == m.group(1) for ref in refs):
                refs.append(Ref(ref=m.group(1)))
        return refs

    def _parse_mentions(self, text: str) -> List[str]:
        return [m.group(1) for m in self._re_mention.finditer(text)]

    @staticmethod
    def _parse_contacts(pattern: re.Pattern, text: str) -> List[Contact]:
        return [Contact(name=m.group(1), email=m.group(2)) for m in pattern.finditer(text)]

    @staticmethod
    def _uniq_refs(refs: List[Ref]) -> List[Ref]:
        """Drop repeated refs and bare refs already covered by an action ref."""
        qualified = {ref.ref for ref in refs if ref.action or ref.source}
        seen = set()
        unique: List[Ref] = []
        for ref in refs:
            if not (ref.action or ref.source) and ref.ref in qualified:
                continue
            key = (ref.action, ref.source, ref.ref)
            if key not in seen:
                seen.add(key)
                unique.append(ref)
        return unique

    # ------------------------------------------------------------------
    # Jira
    # ------------------------------------------------------------------
    def _process_jira_issue(self, commit: Commit) -> None:
        if self.jira_client is None:
            logger.debug("No Jira client configured; skipping %s", commit.jira_issue_id)
            return
        try:
            issue = self.jira_client.get_issue(commit.jira_issue_id)
        except JiraError as exc:
            logger.error("Failed to parse Jira story %s: %s", commit.jira_issue_id, exc)
            return

        commit.type = self.options.jira_type_maps.get(issue.type, "")
        commit.jira_issue = JiraIssue(
            type=issue.type,
            summary=issue.summary,
            description=issue.description,
            labels=list(issue.labels),
        )

        pattern = self._re_jira_description
        if pattern is not None and pattern.groups >= 1:
            match = pattern.search(commit.jira_issue.description)
            if match is not None:
                commit.jira_issue.description = match.group(1) or ""
