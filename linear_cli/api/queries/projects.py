"""GraphQL documents for Linear projects."""

LIST_PROJECTS = """
query Projects {
  projects {
    nodes {
      id
      name
      description
      state
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
      targetDate
      startDate
      progress
    }
  }
}
"""

GET_PROJECT = """
query Project($id: String!) {
  project(id: $id) {
    id
    name
    description
    state
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
    members {
      nodes {
        id
        name
      }
    }
    issues {
      nodes {
        id
        identifier
        title
        state {
          name
        }
      }
    }
    targetDate
    startDate
    progress
    updatedAt
    createdAt
  }
}
"""
