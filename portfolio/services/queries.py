"""GraphQL documents sent to the upstream content API."""

BLOG_POST_FIELDS = """
    slug
    title
    excerpt
    content
    author
    tags
    readingTime
    featuredImage
    status
    publishedAt
    updatedAt
"""

PROJECT_FIELDS = BLOG_POST_FIELDS + """
    projectType
    projectStatus
    githubUrl
    liveUrl
    techStack
    thumbnailImage
    featured
"""

LIST_BLOG_POSTS = f"""
query ListBlogPosts {{
  listBlogPosts {{
    items {{{BLOG_POST_FIELDS}}}
  }}
}}
"""

GET_BLOG_POST = f"""
query GetBlogPost($slug: String!) {{
  getBlogPost(slug: $slug) {{{BLOG_POST_FIELDS}}}
}}
"""

LIST_PROJECTS = f"""
query ListProjects {{
  listProjects {{
    items {{{PROJECT_FIELDS}}}
  }}
}}
"""

GET_PROJECT = f"""
query GetProject($slug: String!) {{
  getProject(slug: $slug) {{{PROJECT_FIELDS}}}
}}
"""

CREATE_CONTACT_FORM = """
mutation CreateContactForm($input: CreateContactFormInput!) {
  createContactForm(input: $input) {
    id
    name
    email
    subject
    message
    createdAt
    status
  }
}
"""
