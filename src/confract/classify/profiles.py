"""The five content types and their section taxonomies.

Order matters: detection ties resolve to the earliest profile, and section
scoring ties resolve to the earliest section of a profile.
"""

from ..models import ContentTypeProfile, SectionDefinition

S = SectionDefinition

WATCHLIST = ContentTypeProfile(
    type="watchlist",
    label="Entertainment watchlist",
    emoji="🎬",
    keywords=("watch", "movie", "film", "series", "anime", "show", "episode", "season",
              "netflix", "hbo", "disney", "seen", "rewatch"),
    sections=(
        S("movies", ("film", "movie", "cinema", "directed"), "🎬", "movies"),
        S("tv", ("series", "show", "season", "episode", "tv", "sitcom", "miniseries"), "📺", "tv"),
        S("anime", ("anime", "manga", "shonen", "seinen", "crunchyroll", "ova", "dubbed"), "⛩", "anime"),
        S("unclear", (), "❓", "unclear"),
    ),
    default_title="Watchlist",
)

RESEARCH = ContentTypeProfile(
    type="research",
    label="Research notes",
    emoji="🔬",
    keywords=("research", "study", "paper", "thesis", "journal", "citation", "hypothesis",
              "experiment", "abstract", "methodology", "findings", "peer reviewed", "academic",
              "conclusion", "data", "analysis"),
    sections=(
        S("concepts", ("theory", "concept", "principle", "define", "definition", "model"), "💡", "research"),
        S("data", ("data", "result", "finding", "statistic", "percent", "average", "mean", "measured"), "📊", "research"),
        S("sources", ("source", "citation", "reference", "according", "author", "published"), "📚", "notes"),
        S("questions", ("?", "unknown", "unclear", "why", "how does", "further research"), "❓", "unclear"),
    ),
    default_title="Research Notes",
)

TASKS = ContentTypeProfile(
    type="tasks",
    label="Task list",
    emoji="✅",
    keywords=("todo", "to-do", "task", "action", "complete", "done", "pending", "deadline", "due",
              "sprint", "backlog", "milestone", "deliverable", "assign", "priority"),
    sections=(
        S("urgent", ("urgent", "asap", "immediately", "critical", "today", "priority", "blocker"), "🔥", "tasks"),
        S("pending", ("todo", "pending", "next", "backlog", "planned", "upcoming", "should"), "📋", "tasks"),
        S("done", ("done", "complete", "finished", "resolved", "shipped", "✓", "✅", "closed"), "✅", "tasks"),
        S("blocked", ("blocked", "waiting", "depends", "need", "hold", "on hold"), "🚧", "tasks"),
    ),
    default_title="Task List",
)

DOCUMENTATION = ContentTypeProfile(
    type="documentation",
    label="Technical documentation",
    emoji="📖",
    keywords=("install", "setup", "config", "endpoint", "api", "function", "class", "method",
              "parameter", "returns", "usage", "import", "require", "npm", "pip", "yarn",
              "package", "module", "library", "dependency", "code", "syntax"),
    sections=(
        S("overview", ("overview", "intro", "about", "what is", "purpose", "description"), "📋", "notes"),
        S("installation", ("install", "setup", "npm", "pip", "yarn", "requirements", "dependencies", "brew"), "⚙️", "notes"),
        S("usage", ("usage", "example", "how to", "use", "call", "invoke", "run"), "💻", "notes"),
        S("api", ("api", "endpoint", "function", "method", "class", "parameter", "returns", "route"), "🔌", "notes"),
        S("config", ("config", "option", "setting", "env", "variable", "flag", ".env"), "🔧", "notes"),
        S("notes", ("note", "warning", "tip", "important", "caveat", "gotcha", "known issue"), "📝", "notes"),
    ),
    default_title="Documentation",
)

NOTES = ContentTypeProfile(
    type="notes",
    label="General notes",
    emoji="📝",
    keywords=(),
    sections=(
        S("main", (), "📝", "notes"),
        S("unclear", (), "❓", "unclear"),
    ),
    default_title="Notes",
)

PROFILES: tuple[ContentTypeProfile, ...] = (WATCHLIST, RESEARCH, TASKS, DOCUMENTATION, NOTES)

FALLBACK = NOTES


def get_profile(content_type: str) -> ContentTypeProfile:
    """Look up a profile by its type identifier, falling back to notes."""
    for profile in PROFILES:
        if profile.type == content_type:
            return profile
    return FALLBACK
