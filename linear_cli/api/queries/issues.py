"""GraphQL documents for Linear issues, plus the filter builder for listing."""

from typing import Any, Dict, Optional

LIST_ISSUES = """
query Issues($filter: IssueFilter, $first: Int, $after: String) {
  issues(first: $first, after: $after, filter: $filter) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      id
      identifier
      title
      state {
        id
        name
        color
      }
      assignee {
        id
        name
      }
      team {
        id
        name
      }
      project {
        id
        name
      }
      priority
      estimate
      startedAt
      completedAt
      cycle {
        id
        name
        number
      }
      labels {
        nodes {
          name
        }
      }
      createdAt
      updatedAt
    }
  }
}
"""

GET_ISSUE = """
query Issue($id: String!) {
  issue(id: $id) {
    id
    identifier
    title
    description
    url
    state {
      id
      name
      color
    }
    assignee {
      id
      name
      email
    }
    team {
      id
      name
    }
    project {
      id
      name
    }
    priority
    estimate
    labels {
      nodes {
        id
        name
        color
      }
    }
    comments {
      nodes {
        id
        body
        user {
          name
        }
        createdAt
      }
    }
    createdAt
    updatedAt
  }
}
"""

# Resolves an identifier like ENG-123 to the issue UUID and owning team
ISSUE_TEAM = """
query IssueTeam($id: String!) {
  issue(id: $id) {
    id
    identifier
    team {
      id
      name
    }
  }
}
"""

CREATE_ISSUE = """
mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {
      id
      identifier
      title
      url
    }
  }
}
"""

UPDATE_ISSUE = """
mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue {
      id
      identifier
      title
      url
    }
  }
}
"""

CREATE_COMMENT = """
mutation CreateComment($issueId: String!, $body: String!) {
  commentCreate(input: { issueId: $issueId, body: $body }) {
    success
    comment {
      id
      body
    }
  }
}
"""


def build_issue_filter(
    team_id: Optional[str] = None,
    assignee_id: Optional[str] = None,
    status: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build an IssueFilter variable from optional criteria.

    Only the supplied criteria appear in the result, so an empty dict means
    "no filtering".

    Args:
        team_id: Team UUID
        assignee_id: User UUID
        status: Workflow state name, matched case-insensitively

    Returns:
        IssueFilter input object
    """
    issue_filter: Dict[str, Any] = {}
    if team_id:
        issue_filter["team"] = {"id": {"eq": team_id}}
    if assignee_id:
        issue_filter["assignee"] = {"id": {"eq": assignee_id}}
    if status:
        issue_filter["state"] = {"name": {"eqIgnoreCase": status}}
    return issue_filter
