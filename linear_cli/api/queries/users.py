"""GraphQL documents for Linear users and labels."""

LIST_USERS = """
query Users($first: Int, $after: String) {
  users(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      id
      name
      displayName
      email
      active
    }
  }
}
"""

LIST_ISSUE_LABELS = """
query IssueLabels($first: Int, $after: String) {
  issueLabels(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      id
      name
      team {
        id
      }
    }
  }
}
"""
