"""
ghmock Endpoint Catalog

GitHub REST API endpoints commonly mocked in tests.

Names follow ``<METHOD>_<PATH SEGMENTS>``, with each ``{param}`` spelled
``BY_<PARAM>``.
"""

from .router import EndpointPattern

# Users
GET_USER = EndpointPattern("/user", "GET")
PATCH_USER = EndpointPattern("/user", "PATCH")
GET_USER_REPOS = EndpointPattern("/user/repos", "GET")
GET_USER_ORGS = EndpointPattern("/user/orgs", "GET")
GET_USERS = EndpointPattern("/users", "GET")
GET_USERS_BY_USERNAME = EndpointPattern("/users/{username}", "GET")
GET_USERS_ORGS_BY_USERNAME = EndpointPattern("/users/{username}/orgs", "GET")
GET_USERS_REPOS_BY_USERNAME = EndpointPattern("/users/{username}/repos", "GET")
GET_USERS_FOLLOWERS_BY_USERNAME = EndpointPattern("/users/{username}/followers", "GET")

# Organizations
GET_ORGS_BY_ORG = EndpointPattern("/orgs/{org}", "GET")
PATCH_ORGS_BY_ORG = EndpointPattern("/orgs/{org}", "PATCH")
GET_ORGS_MEMBERS_BY_ORG = EndpointPattern("/orgs/{org}/members", "GET")
GET_ORGS_PROJECTS_BY_ORG = EndpointPattern("/orgs/{org}/projects", "GET")
GET_ORGS_REPOS_BY_ORG = EndpointPattern("/orgs/{org}/repos", "GET")
POST_ORGS_REPOS_BY_ORG = EndpointPattern("/orgs/{org}/repos", "POST")
GET_ORGS_TEAMS_BY_ORG = EndpointPattern("/orgs/{org}/teams", "GET")

# Repositories
GET_REPOS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}", "GET")
PATCH_REPOS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}", "PATCH")
DELETE_REPOS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}", "DELETE")
GET_REPOS_BRANCHES_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/branches", "GET")
GET_REPOS_BRANCHES_BY_OWNER_BY_REPO_BY_BRANCH = EndpointPattern(
    "/repos/{owner}/{repo}/branches/{branch}", "GET"
)
GET_REPOS_COMMITS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/commits", "GET")
GET_REPOS_COMMITS_BY_OWNER_BY_REPO_BY_REF = EndpointPattern(
    "/repos/{owner}/{repo}/commits/{ref}", "GET"
)
GET_REPOS_CONTENTS_BY_OWNER_BY_REPO_BY_PATH = EndpointPattern(
    "/repos/{owner}/{repo}/contents/{path:path}", "GET"
)
PUT_REPOS_CONTENTS_BY_OWNER_BY_REPO_BY_PATH = EndpointPattern(
    "/repos/{owner}/{repo}/contents/{path:path}", "PUT"
)
GET_REPOS_CONTRIBUTORS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/contributors", "GET")
GET_REPOS_RELEASES_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/releases", "GET")
POST_REPOS_RELEASES_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/releases", "POST")
GET_REPOS_RELEASES_LATEST_BY_OWNER_BY_REPO = EndpointPattern(
    "/repos/{owner}/{repo}/releases/latest", "GET"
)
GET_REPOS_TAGS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/tags", "GET")

# Issues and pull requests
GET_REPOS_ISSUES_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/issues", "GET")
POST_REPOS_ISSUES_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/issues", "POST")
GET_REPOS_ISSUES_BY_OWNER_BY_REPO_BY_ISSUE_NUMBER = EndpointPattern(
    "/repos/{owner}/{repo}/issues/{issue_number}", "GET"
)
PATCH_REPOS_ISSUES_BY_OWNER_BY_REPO_BY_ISSUE_NUMBER = EndpointPattern(
    "/repos/{owner}/{repo}/issues/{issue_number}", "PATCH"
)
GET_REPOS_ISSUES_COMMENTS_BY_OWNER_BY_REPO_BY_ISSUE_NUMBER = EndpointPattern(
    "/repos/{owner}/{repo}/issues/{issue_number}/comments", "GET"
)
POST_REPOS_ISSUES_COMMENTS_BY_OWNER_BY_REPO_BY_ISSUE_NUMBER = EndpointPattern(
    "/repos/{owner}/{repo}/issues/{issue_number}/comments", "POST"
)
GET_REPOS_PULLS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/pulls", "GET")
POST_REPOS_PULLS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/pulls", "POST")
GET_REPOS_PULLS_BY_OWNER_BY_REPO_BY_PULL_NUMBER = EndpointPattern(
    "/repos/{owner}/{repo}/pulls/{pull_number}", "GET"
)
PUT_REPOS_PULLS_MERGE_BY_OWNER_BY_REPO_BY_PULL_NUMBER = EndpointPattern(
    "/repos/{owner}/{repo}/pulls/{pull_number}/merge", "PUT"
)

# Actions
GET_REPOS_ACTIONS_ARTIFACTS_BY_OWNER_BY_REPO = EndpointPattern(
    "/repos/{owner}/{repo}/actions/artifacts", "GET"
)
GET_REPOS_ACTIONS_RUNS_BY_OWNER_BY_REPO = EndpointPattern("/repos/{owner}/{repo}/actions/runs", "GET")
GET_REPOS_ACTIONS_WORKFLOWS_BY_OWNER_BY_REPO = EndpointPattern(
    "/repos/{owner}/{repo}/actions/workflows", "GET"
)
POST_REPOS_ACTIONS_WORKFLOWS_DISPATCHES_BY_OWNER_BY_REPO_BY_WORKFLOW_ID = EndpointPattern(
    "/repos/{owner}/{repo}/actions/workflows/{workflow_id}/dispatches", "POST"
)

# Search
GET_SEARCH_CODE = EndpointPattern("/search/code", "GET")
GET_SEARCH_ISSUES = EndpointPattern("/search/issues", "GET")
GET_SEARCH_REPOSITORIES = EndpointPattern("/search/repositories", "GET")

# Misc
GET_RATE_LIMIT = EndpointPattern("/rate_limit", "GET")


def lookup(name: str) -> EndpointPattern:
    """
    Find a catalog endpoint by its constant name.

    Raises:
        KeyError: If no such endpoint exists
    """
    value = globals().get(name.upper())
    if not isinstance(value, EndpointPattern):
        raise KeyError(f"unknown endpoint: {name}")
    return value
