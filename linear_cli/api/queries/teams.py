"""GraphQL documents for Linear teams."""

LIST_TEAMS = """
query Teams {
  teams {
    nodes {
      id
      name
      key
      description
      states {
        nodes {
          id
          name
          color
        }
      }
      members {
        nodes {
          id
          name
          email
        }
      }
    }
  }
}
"""

# Minimal projection used for name -> ID resolution
TEAM_NAMES = """
query TeamNames($first: Int, $after: String) {
  teams(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      id
      name
      key
    }
  }
}
"""

GET_TEAM = """
query Team($id: String!) {
  team(id: $id) {
    id
    name
    key
    description
    states {
      nodes {
        id
        name
        color
        position
      }
    }
    members {
      nodes {
        id
        name
        email
      }
    }
    labels {
      nodes {
        id
        name
        color
      }
    }
    cycles {
      nodes {
        id
        name
        number
        startsAt
        endsAt
      }
    }
  }
}
"""

TEAM_STATES = """
query TeamStates($id: String!) {
  team(id: $id) {
    id
    name
    states {
      nodes {
        id
        name
        type
      }
    }
  }
}
"""
