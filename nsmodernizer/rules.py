"""Rule tables for NaviServer API deprecations.

Pure data. The names and mappings below encode migration knowledge for the
NaviServer API; do not add mappings that have not been verified against the
server documentation.
"""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RewriteRule:
    """One ordered textual substitution.

    ``replacement`` is a ``re.sub`` template; ``\\1``/``\\2`` re-emit captured
    arguments. With ``word_boundary`` the pattern only matches when the
    command token ends at a word boundary, so ``ns_cp`` never rewrites the
    front of ``ns_cpfp``.
    """

    pattern: str
    replacement: str
    word_boundary: bool = True

    @property
    def regex(self) -> re.Pattern:
        return re.compile(self.pattern + (r"\b" if self.word_boundary else ""))


@dataclass(frozen=True)
class ExcludedRewrite:
    """A rewrite that could be automated but needs a human decision."""

    command: str
    replacement: str | None
    reason: str


@dataclass(frozen=True)
class RuleSet:
    """The tables consulted by the reporter and the rewriter."""

    deprecated: frozenset[str]
    uncertain: frozenset[str] = frozenset()
    rewrites: tuple[RewriteRule, ...] = ()
    modernize: frozenset[str] = frozenset()
    excluded: tuple[ExcludedRewrite, ...] = field(default=())


# Commands without a direct replacement; reported only.
DEPRECATED_COMMANDS = frozenset([
    "ns_browsermatch",
    "ns_choosecharset",
    "ns_cookiecharset",
    "ns_formfieldcharset",
    "ns_formvalueput",
    "ns_paren",
    "ns_tagelement",
    "ns_tagelementset",

    "Paren",
    "env",
    "getformdata",
    "issmallint",
    "ns_adp_compress",
    "ns_adp_eval",
    "ns_adp_mime",
    "ns_adp_registertag",
    "ns_adp_safeeval",
    "ns_adp_stream",
    "ns_cancel",
    "ns_checkurl",
    "ns_chmod",
    "ns_conncptofp",
    "ns_connsendfp",
    "ns_cp",
    "ns_cpfp",
    "ns_db verbose",
    "ns_event",
    "ns_getchannels",
    "ns_geturl",
    "ns_hmac_sha2",
    "ns_httpget",
    "ns_httpopen",
    "ns_httppost",
    "ns_ictl oncleanup",
    "ns_ictl oncreate",
    "ns_ictl ondelete",
    "ns_ictl oninit",
    "ns_info filters",
    "ns_info pagedir",
    "ns_info pageroot",
    "ns_info platform",
    "ns_info requestprocs",
    "ns_info tcllib",
    "ns_info traces",
    "ns_info url2file",
    "ns_info winnt",
    "ns_isformcached",
    "ns_limits_get",
    "ns_limits_list",
    "ns_limits_register",
    "ns_limits_set",
    "ns_link",
    "ns_mkdir",
    "ns_parsetime",
    "ns_passwordcheck",
    "ns_pooldescription",
    "ns_puts",
    "ns_register_adptag",
    "ns_rename",
    "ns_resetcachedform",
    "ns_returnadminnotice",
    "ns_rmdir",
    "ns_server keepalive",
    "ns_set new",
    "ns_set print",
    "ns_set_precision",
    "ns_sha2",
    "ns_startcontent",
    "ns_subnetmatch",
    "ns_thread begin",
    "ns_thread begindetached",
    "ns_thread get",
    "ns_thread getid",
    "ns_thread join",
    "ns_tmpnam",
    "ns_unlink",
    "ns_unregister_proc",
    "ns_updateheader",
    "ns_var",
    "ns_writecontent",
])

# Commands whose future is unclear. Nothing is flagged at the moment.
UNCERTAIN_COMMANDS: frozenset[str] = frozenset()

# Case-insensitive ns_set operations superseded by the -nocase option.
MODERNIZE_COMMANDS = frozenset([
    "ns_set icput",
    "ns_set idelkey",
    "ns_set ifind",
    "ns_set iget",
    "ns_set imerge",
    "ns_set iunique",
])

# Order matters: every rule runs on the output of the rules above it.
REWRITE_RULES = (
    RewriteRule(r"ns_adp_mime", "ns_adp_mimetype"),
    RewriteRule(r"ns_adp_registertag", "ns_adp_registeradp"),
    RewriteRule(r"ns_cancel", "ns_unschedule_proc"),
    RewriteRule(r'ns_chmod\s+([a-zA-Z$"]+) +([0-9]+)', r"file attributes \1 -permissions \2"),
    RewriteRule(r"ns_conncptofp", "ns_conn copy 0 [ns_conn contentlength]"),
    RewriteRule(r"ns_cp", "file copy"),
    RewriteRule(r"ns_cpfp", "fcopy"),
    RewriteRule(r"ns_info\s+pageroot", "ns_server pagedir"),
    RewriteRule(r"ns_info\s+tcllib", "ns_server tcllib"),
    RewriteRule(r"ns_link", "file link -hard"),
    RewriteRule(r"ns_mkdir", "file mkdir"),
    RewriteRule(r"ns_puts", "ns_adp_puts"),
    RewriteRule(r"ns_register_adptag", "ns_adp_registerscript"),
    RewriteRule(r"ns_rmdir", "file delete"),
    RewriteRule(r"ns_server\s+keepalive", "ns_conn keepalived"),
    RewriteRule(r"ns_set\s+new", "ns_set create", word_boundary=False),
    RewriteRule(r"ns_subnetmatch", "ns_ip match"),
    RewriteRule(r"ns_thread\s+get", "ns_thread handle"),
    RewriteRule(r"ns_thread\s+getid", "ns_thread id"),
    RewriteRule(r"ns_thread\s+join", "ns_thread wait"),
    RewriteRule(r"ns_thread\s+start", "ns_thread create"),
    RewriteRule(r"ns_tmpnam", "ns_mktemp"),
    RewriteRule(r"ns_unlink", "file delete"),
    RewriteRule(r"ns_checkurl", "ns_requestauthorize"),
)

_CONTENT_SPOOLING = (
    "Predates spooling of received content to a file (and chunked encoding), "
    "so the calling logic has to be inspected; ns_getcontent may be the better choice."
)

# Never applied automatically. ns_conncptofp is still rewritten by the
# rule above; its entry here marks the rewritten call for review.
EXCLUDED_REWRITES = (
    ExcludedRewrite("ns_writecontent", "ns_conn copy 0 [ns_conn contentlength]", _CONTENT_SPOOLING),
    ExcludedRewrite("ns_conncptofp", "ns_conn copy 0 [ns_conn contentlength]", _CONTENT_SPOOLING),
    ExcludedRewrite("ns_httpget", None, "No mechanical replacement; port to ns_http by hand."),
    ExcludedRewrite("ns_set print", None, "No mechanical replacement; output format differs."),
)

DEFAULT_RULESET = RuleSet(
    deprecated=DEPRECATED_COMMANDS,
    uncertain=UNCERTAIN_COMMANDS,
    rewrites=REWRITE_RULES,
    modernize=MODERNIZE_COMMANDS,
    excluded=EXCLUDED_REWRITES,
)
