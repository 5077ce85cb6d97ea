"""GraphQL query templates for GitHub Projects API."""

# Query to check the token and get the login
GET_VIEWER = """
query GetViewer {
  viewer {
    login
  }
}
"""

# Query to list the viewer's and their organizations' projects
GET_VIEWER_PROJECTS = """
query GetViewerProjects {
  viewer {
    login
    projectsV2(first: 20) {
      nodes {
        id
        title
      }
    }
    organizations(first: 20) {
      nodes {
        login
        projectsV2(first: 20) {
          nodes {
            id
            title
          }
        }
      }
    }
  }
}
"""

# Query to get the single-select fields (Status, Priority, ...) of a project
GET_PROJECT_FIELDS = """
query GetProjectFields($id: ID!) {
  node(id: $id) {
    ... on ProjectV2 {
      fields(first: 20) {
        nodes {
          ... on ProjectV2SingleSelectField {
            id
            name
            options {
              id
              name
            }
          }
        }
      }
    }
  }
}
"""

# Mutation to add a draft issue to a project
ADD_DRAFT_ISSUE = """
mutation AddDraftIssue($project: ID!, $title: String!, $body: String!) {
  addProjectV2DraftIssue(input: {projectId: $project, title: $title, body: $body}) {
    projectItem {
      id
    }
  }
}
"""

# Mutation to set a single-select field value (Status, Priority)
UPDATE_ITEM_FIELD = """
mutation UpdateItemField($project: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
  updateProjectV2ItemFieldValue(input: {
    projectId: $project
    itemId: $itemId
    fieldId: $fieldId
    value: {singleSelectOptionId: $optionId}
  }) {
    projectV2Item {
      id
    }
  }
}
"""

# Mutation to archive a project item
ARCHIVE_ITEM = """
mutation ArchiveItem($project: ID!, $itemId: ID!) {
  archiveProjectV2Item(input: {projectId: $project, itemId: $itemId}) {
    item {
      id
    }
  }
}
"""
