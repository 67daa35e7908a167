#!/usr/bin/env python3
"""
Script to reopen a sold lot from the command line
Usage: python scripts/reopen_property.py "Living Water Subdivision" 5 12
"""

import os
import sys
from datetime import datetime
from urllib.parse import quote
import requests

def reopen_property(project: str, block: str, lot: str) -> bool:
    """Call the reopen endpoint and report buyer records that could not be removed"""
    
    api_url = os.getenv('API_URL', 'http://localhost:8000')
    endpoint = f"{api_url}/api/properties/{quote(project)}/{quote(block)}/{quote(lot)}/reopen"
    
    try:
        response = requests.post(endpoint, timeout=30)
        
        if response.status_code == 200:
            data = response.json()
            print(f"[{datetime.now()}] {data['message']}")
            for table, count in data['data']['deleted'].items():
                print(f"  {table}: {count} row(s) removed")
            return True
        else:
            detail = response.json().get('detail', '') if response.headers.get('content-type', '').startswith('application/json') else ''
            print(f"[{datetime.now()}] Reopen failed with status {response.status_code}: {detail}")
            return False
            
    except requests.RequestException as e:
        print(f"[{datetime.now()}] Error during reopen: {str(e)}")
        return False

if __name__ == "__main__":
    if len(sys.argv) != 4:
        print('Usage: python scripts/reopen_property.py "<project>" <block> <lot>')
        sys.exit(1)
    
    success = reopen_property(sys.argv[1], sys.argv[2], sys.argv[3])
    sys.exit(0 if success else 1)
