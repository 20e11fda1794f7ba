"""Paginated GraphQL documents used to pull full workspace snapshots for analytics."""

LIST_TEAMS = """
query AnalyticsTeams($first: Int, $after: String) {
  teams(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      id
      name
      key
      description
    }
  }
}
"""

LIST_PROJECTS = """
query AnalyticsProjects($first: Int, $after: String) {
  projects(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      id
      name
      description
      state
      progress
      startDate
      targetDate
      labels {
        nodes {
          id
          name
        }
      }
      teams {
        nodes {
          id
          name
        }
      }
      lead {
        id
        name
      }
    }
  }
}
"""

LIST_ISSUES = """
query AnalyticsIssues($first: Int, $after: String, $filter: IssueFilter) {
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
        type
      }
      assignee {
        id
        name
        email
      }
      team {
        id
        name
        key
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
        }
      }
      startedAt
      completedAt
      createdAt
      updatedAt
    }
  }
}
"""
