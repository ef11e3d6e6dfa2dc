"""
Bundled blog posts (markdown content)
"""
from utils.blog import BlogPost

BLOG_POSTS = [
    BlogPost(
        id="1",
        title="Building Modern Web Applications with Next.js 14",
        excerpt="Exploring the latest features in Next.js 14 and how they can transform your web development workflow.",
        content="""# Building Modern Web Applications with Next.js 14

Next.js 14 has changed the way we build web applications. The App Router, performance
optimizations and developer experience improvements make it easy to ship fast, scalable apps.

## Key Features

### 1. App Router
File-based routing that supports nested layouts, loading states, error boundaries and parallel routes.

### 2. Server Components
Rendering components on the server reduces the JavaScript bundle size.

```typescript
export default async function PostsPage() {
  const posts = await fetchPosts()
  return <div>{posts.map(post => <PostCard key={post.id} post={post} />)}</div>
}
```

### 3. Improved Performance
Faster local development, better code splitting and enhanced image optimization.

## Getting Started

```bash
npx create-next-app@latest my-app --typescript --tailwind --eslint --app
```
""",
        author="cyrus",
        published_at="2025-01-15T10:00:00Z",
        category="web-dev",
        tags=["Next.js", "React", "Web Development", "JavaScript"],
        read_time=5,
        featured=True,
        slug="building-modern-web-applications-nextjs-14",
    ),
    BlogPost(
        id="2",
        title="Excel Data Analysis: From Basics to Advanced Techniques",
        excerpt="Master Excel for data analysis with practical examples and advanced formulas that will transform your workflow.",
        content="""# Excel Data Analysis: From Basics to Advanced Techniques

Excel remains one of the most powerful tools for data analysis.

## Getting Started with Data Analysis

### 1. Data Organization
- Use consistent headers
- Avoid merged cells
- Keep data in tabular format
- Remove duplicates

### 2. Essential Functions

```excel
=VLOOKUP(lookup_value, table_array, col_index_num, [range_lookup])
=XLOOKUP(lookup_value, lookup_array, return_array, [if_not_found])
```

### 3. Pivot Tables
1. Select your data range
2. Insert > PivotTable
3. Drag fields to appropriate areas
4. Customize as needed

## Comparing Data Sources

When the same entity lives in several systems, reconcile them by a stable identifier first
and fall back to normalized names only when the identifier is missing. The Data Comparison
page on this site does exactly that for agency exports, mapping tables and taxonomy terms.
""",
        author="cyrus",
        published_at="2025-01-12T14:30:00Z",
        category="data-analysis",
        tags=["Excel", "Data Analysis", "Productivity", "Business Intelligence"],
        read_time=8,
        featured=True,
        slug="excel-data-analysis-basics-to-advanced",
    ),
    BlogPost(
        id="3",
        title="The Future of Web Development: Trends to Watch in 2025",
        excerpt="Discover the emerging technologies and trends that will shape web development in 2025 and beyond.",
        content="""# The Future of Web Development: Trends to Watch in 2025

## 1. AI-Assisted Development
Code completion and review tools are becoming part of every editor.

## 2. WebAssembly
Near-native performance in the browser for compute-heavy workloads.

## 3. Edge Computing
Rendering and data access closer to the user.

## 4. TypeScript Everywhere
Type safety is now the default for new JavaScript projects.
""",
        author="cyrus",
        published_at="2025-01-08T09:15:00Z",
        category="tech",
        tags=["Web Development", "Trends", "AI", "WebAssembly", "TypeScript"],
        read_time=6,
        featured=False,
        slug="future-web-development-trends-2025",
    ),
    BlogPost(
        id="4",
        title="Maximizing Productivity with Modern Development Tools",
        excerpt="A comprehensive guide to the tools and workflows that can significantly boost your development productivity.",
        content="""# Maximizing Productivity with Modern Development Tools

## Editor Setup
VS Code with a small set of well-chosen extensions covers most workflows.

## Terminal
A fast shell, fuzzy finding and good git aliases save minutes every hour.

## Conclusion

Remember:
- Choose tools that solve real problems
- Don't over-engineer your setup
- Regularly evaluate and update your toolchain
- Share knowledge with your team
""",
        author="cyrus",
        published_at="2025-01-05T11:20:00Z",
        category="productivity",
        tags=["Productivity", "Tools", "Workflow", "Development", "VS Code"],
        read_time=10,
        featured=False,
        slug="maximizing-productivity-modern-development-tools",
    ),
]
