#This file is for development purposes only

import logging
import sys

from jira_tracker_impl import get_client


def main():
    logging.basicConfig(level=logging.INFO)
    client = get_client(interactive=True)

    issue_id = sys.argv[1] if len(sys.argv) > 1 else "TEST-1"
    print(f"\nFetching {issue_id}...")
    try:
        issue = client.get_issue(issue_id)
        print(f"- {issue}")
        print(f"  status: {issue.status} ({issue.state.value}), resolution: {issue.resolution}")
        print(f"  labels: {', '.join(issue.labels)}")
        for link in issue.links():
            print(f"  link: {link}")
    except Exception as e:
        print(f"Error connecting to Jira: {e}")

if __name__ == "__main__":
    main()
